from pydantic import BaseModel, ConfigDict


class Task(BaseModel):
    id: int
    task: str

    model_config = ConfigDict(from_attributes=True)


class NewTask(BaseModel):
    task: str


class UpdateTask(BaseModel):
    task: str


class Message(BaseModel):
    msg: str
