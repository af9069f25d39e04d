# schemas/common.py

from typing import Literal
from pydantic import BaseModel

PaymentMethod = Literal["PIX", "Card", "Cash"]


class ActionResult(BaseModel):
    success: bool
    message: str
