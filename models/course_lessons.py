from sqlalchemy.orm import relationship
from models import db


class Lesson(db.Model):
    __tablename__ = "lessons"

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    video_url = db.Column(db.String(500), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    course = relationship("Course", back_populates="lessons")
    resources = relationship("LessonResource", back_populates="lesson", cascade="all, delete-orphan")
    completions = relationship("LessonCompletion", back_populates="lesson", cascade="all, delete-orphan")

    @classmethod
    def course_query(cls, course_id):
        """Lessons of a course in creation order."""
        return cls.query.filter_by(course_id=course_id).order_by(cls.created_at, cls.id)

    @classmethod
    def find_by_course(cls, course_id):
        return cls.course_query(course_id).all()

    def __repr__(self):
        return f"<Lesson {self.title} (Course ID {self.course_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "video_url": self.video_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
