from pydantic import BaseModel


class StoredImage(BaseModel):
    id: str
    filename: str
    content_type: str
    storage_key: str
    size_bytes: int
    url: str


class GalleryImage(BaseModel):
    name: str
    url: str
