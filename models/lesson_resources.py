from models import db


class LessonResource(db.Model):
    __tablename__ = "lesson_resources"

    id = db.Column(db.Integer, primary_key=True)
    lesson_id = db.Column(db.Integer, db.ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False, index=True)
    resource_url = db.Column(db.String(500), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    lesson = db.relationship("Lesson", back_populates="resources")

    @classmethod
    def find_by_lesson(cls, lesson_id):
        return cls.query.filter_by(lesson_id=lesson_id).order_by(cls.id).all()

    def to_dict(self):
        return {
            "id": self.id,
            "lesson_id": self.lesson_id,
            "resource_url": self.resource_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
