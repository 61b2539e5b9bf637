"""
ContentElement model — content items placed on a page

``l18n_parent = 0`` marks a standalone element: one that is not a
translation of a default-language element.
"""

from sqlalchemy import Column, Index, Integer, String, Text

from app.database import Base


class ContentElement(Base):
    __tablename__ = "tt_content"

    uid = Column(Integer, primary_key=True, index=True, autoincrement=True)
    pid = Column(Integer, nullable=False, default=0)
    sys_language_uid = Column(Integer, nullable=False, default=0)
    l18n_parent = Column(Integer, nullable=False, default=0)
    header = Column(String(255), nullable=False, default="")
    bodytext = Column(Text, nullable=True)

    __table_args__ = (Index("idx_tt_content_pid_language_parent", "pid", "sys_language_uid", "l18n_parent"),)
