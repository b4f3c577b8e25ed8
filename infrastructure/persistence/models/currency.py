from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, Float, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class RateCacheDB(Base):
	__tablename__ = 'rates_cache'

	base_currency: Mapped[str] = mapped_column(String(5), primary_key=True)
	target_currency: Mapped[str] = mapped_column(String(5), primary_key=True)
	rate: Mapped[float] = mapped_column(Float, nullable=False)
	updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

	__table_args__ = (CheckConstraint('rate > 0', name='ck_rates_cache_positive_rate'),)


class UserDB(Base):
	__tablename__ = 'users'

	user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
	base_currency: Mapped[str] = mapped_column(String(5), nullable=False, default='USD')
	favorites: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
	updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
