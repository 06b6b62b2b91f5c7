from sqlalchemy import Column, String, LargeBinary, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class SideChannelModel(Base):
    """
    One row per side-channel key. `value` holds the serialized
    {past, present, future} document of a scoring session.
    """
    __tablename__ = 'side_channel'

    key = Column(String, primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<SideChannelModel(key='{self.key}', bytes={len(self.value or b'')})>"
