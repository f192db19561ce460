from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tvtracker.db.database import Base


class UserORM(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String(10), nullable=False, default="user", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    ratings = relationship("RatingORM", back_populates="author", passive_deletes=True)


class MovieORM(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False, index=True)
    # JSON-encoded list of genre names
    genres = Column(String, nullable=False)
    synopsis = Column(Text)
    release_date = Column(Date, index=True)
    duration_min = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class SeriesORM(Base):
    __tablename__ = "series"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False, index=True)
    genres = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    synopsis = Column(Text)
    release_date = Column(Date, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    seasons = relationship("SeasonORM", back_populates="series", cascade="all, delete-orphan")


class SeasonORM(Base):
    __tablename__ = "seasons"
    __table_args__ = (
        UniqueConstraint("series_id", "season_no", name="uq_season_series_no"),
    )

    id = Column(Integer, primary_key=True, index=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    season_no = Column(Integer, nullable=False)
    title = Column(String(200))
    synopsis = Column(Text)
    release_date = Column(Date)
    episode_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    series = relationship("SeriesORM", back_populates="seasons")
    episodes = relationship("EpisodeORM", back_populates="season", cascade="all, delete-orphan")


class EpisodeORM(Base):
    __tablename__ = "episodes"
    __table_args__ = (
        UniqueConstraint("season_id", "ep_no", name="uq_episode_season_no"),
    )

    id = Column(Integer, primary_key=True, index=True)
    series_id = Column(Integer, ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True)
    season_id = Column(Integer, ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False, index=True)
    ep_no = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    synopsis = Column(Text)
    duration_min = Column(Integer, nullable=False)
    release_date = Column(Date)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    season = relationship("SeasonORM", back_populates="episodes")


class RatingORM(Base):
    __tablename__ = "ratings"
    # one rating per author and target, enforced by the database
    __table_args__ = (
        UniqueConstraint("author_id", "target_type", "target_id", name="uq_rating_author_target"),
        Index("ix_rating_target", "target_type", "target_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # no foreign key: the target lives in either the movies or the series table
    target_type = Column(String(10), nullable=False)
    target_id = Column(Integer, nullable=False)
    score = Column(Integer, nullable=False, index=True)
    review = Column(String(1000))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    author = relationship("UserORM", back_populates="ratings")
