from sqlalchemy import Column, Integer, String, JSON

from app.db.base import Base


class Polygon(Base):
    __tablename__ = "polygons"
    # Для SQLite: не переиспользовать id после удаления последней строки
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    coordinates = Column(
        JSON,
        nullable=False,
        comment="Упорядоченный список точек [[lon, lat], …] контура"
    )

    session_id = Column(
        String(64),
        nullable=False,
        comment="Непрозрачный токен сессии, в которой создан полигон"
    )
