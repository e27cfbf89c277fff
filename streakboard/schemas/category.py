from pydantic import BaseModel


class CategoryOut(BaseModel):
    id: int
    name: str
    color: str

    class Config:
        from_attributes = True
