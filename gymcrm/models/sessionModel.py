from datetime import datetime
from typing import Optional
from sqlalchemy import BigInteger, String, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column

from gymcrm.db.postgresql import Base, BigIntPK


class Session(Base):
    """Login session; the access token carries ``session`` and logout revokes it."""

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    session: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    device_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    last_active_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    revoked_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(
                                                    TIMESTAMP(timezone=True),
                                                    nullable=True,
                                                    server_default=func.now()
                                                )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
                                                    TIMESTAMP(timezone=True),
                                                    nullable=True,
                                                    onupdate=func.now()
                                                    )
