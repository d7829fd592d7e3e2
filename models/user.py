"""
Provides the User model for the application's database schema.

A user owns projects and tasks. Only the bcrypt hash of the password is
stored; the plaintext never reaches the database.

Attributes
----------
name : sqlalchemy.Column
    Display name chosen at registration.
email : sqlalchemy.Column
    The email address of the user, unique and stored lowercase.
password_hash : sqlalchemy.Column
    Salted bcrypt hash of the user's password.
"""

from sqlalchemy import Column, String

from .base import BaseModel


class User(BaseModel):
    """
    Represents a registered account.

    :ivar name: Display name of the user.
    :type name: str
    :ivar email: Email address of the user. It must be unique.
    :type email: str
    :ivar password_hash: bcrypt hash of the password.
    :type password_hash: str
    """

    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User {self.email}>"
