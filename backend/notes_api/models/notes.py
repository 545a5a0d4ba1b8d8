from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)


class NoteUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)


class NoteOut(BaseModel):
    id: int
    owner_id: int
    title: str
    content: str
    created_at: str
    updated_at: str


class MessageOut(BaseModel):
    message: str
