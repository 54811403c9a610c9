from pydantic import BaseModel

class BasicResponse(BaseModel):
    message: str

class CountResponse(BaseModel):
    count: int
