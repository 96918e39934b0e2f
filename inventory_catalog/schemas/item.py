from pydantic import BaseModel, Field


class ItemCreate(BaseModel):
    id: int
    company_name: str
    name: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    stock_quantity: int = Field(ge=0)
    discount: float = Field(default=0.0, ge=0, lt=1, allow_inf_nan=False)
