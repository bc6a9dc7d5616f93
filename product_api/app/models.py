from typing import Optional

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

class Base(DeclarativeBase):
    pass

class Product(Base):
    __tablename__ = "Products"
    # ids are never reused after a delete
    __table_args__ = {"sqlite_autoincrement": True}
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]]
    description: Mapped[Optional[str]]
    quantity: Mapped[int] = mapped_column(default=0)
