from models import db
from sqlalchemy.orm import relationship


class Quiz(db.Model):
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    course = relationship("Course", back_populates="quizzes")
    questions = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="Question.id",
    )
    attempts = relationship("QuizAttempt", back_populates="quiz", cascade="all, delete-orphan")

    @classmethod
    def find_by_course(cls, course_id):
        """Quizzes of a course in listing order (creation order)."""
        return cls.query.filter_by(course_id=course_id).order_by(cls.id).all()

    def __repr__(self):
        return f"<Quiz {self.title}>"

    def to_dict(self, include_questions=False):
        data = {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_questions:
            data["questions"] = [q.to_dict(include_options=True) for q in self.questions]
        return data
