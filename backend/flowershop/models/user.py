from datetime import datetime
from enum import Enum
from sqlmodel import SQLModel


class Role(str, Enum):
    CUSTOMER = "customer"
    FLORIST = "florist"
    ADMIN = "admin"


class User(SQLModel):
    email: str
    name: str
    role: Role
    login_time: datetime
