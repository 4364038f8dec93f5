"""Contact model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from contactbook.database import Base
from contactbook.models.mixins import TimestampMixin


class Contact(Base, TimestampMixin):
    """A person in a user's address book."""

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    photo = Column(String(255), nullable=True)  # filename under the upload dir
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    owner = relationship("User", back_populates="contacts")
