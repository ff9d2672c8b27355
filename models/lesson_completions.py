from models import db


class LessonCompletion(db.Model):
    __tablename__ = "lesson_completions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    lesson_id = db.Column(db.Integer, db.ForeignKey("lessons.id", ondelete="CASCADE"), nullable=False)
    completed_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    user = db.relationship("User", back_populates="lesson_completions")
    lesson = db.relationship("Lesson", back_populates="completions")

    __table_args__ = (
        db.UniqueConstraint("user_id", "lesson_id", name="unique_user_lesson"),
    )

    @classmethod
    def find(cls, user_id, lesson_id):
        return cls.query.filter_by(user_id=user_id, lesson_id=lesson_id).first()

    @classmethod
    def find_by_user(cls, user_id):
        return cls.query.filter_by(user_id=user_id).order_by(cls.id).all()

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "lesson_id": self.lesson_id,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }
