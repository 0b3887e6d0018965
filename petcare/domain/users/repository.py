"""User repository - Database operations for users and addresses"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Address, User


class UserRepository:
    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_phone(db: Session, phone: str) -> Optional[User]:
        return db.query(User).filter(User.phone == phone).first()

    @staticmethod
    def get_default_address(db: Session, user_id: str) -> Optional[Address]:
        return (
            db.query(Address)
            .filter(Address.user_id == user_id, Address.is_default.is_(True))
            .first()
        )

    @staticmethod
    def clear_default_address(db: Session, user_id: str) -> None:
        db.query(Address).filter(Address.user_id == user_id, Address.is_default.is_(True)).update(
            {Address.is_default: False}, synchronize_session=False
        )

    @staticmethod
    def create_address(db: Session, **address_data) -> Address:
        address = Address(**address_data)
        db.add(address)
        db.flush()
        return address
