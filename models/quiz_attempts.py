from models import db


class QuizAttempt(db.Model):
    __tablename__ = "quiz_attempts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False)
    # Per (user, quiz) sequence; not unique across the table.
    attempt_number = db.Column(db.Integer, nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    attempted_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    quiz = db.relationship("Quiz", back_populates="attempts")
    user = db.relationship("User", back_populates="quiz_attempts")
    answers = db.relationship(
        "QuizAttemptAnswer",
        back_populates="attempt",
        cascade="all, delete-orphan",
        order_by="QuizAttemptAnswer.id",
    )

    __table_args__ = (
        db.Index("ix_quiz_attempts_user_quiz", "user_id", "quiz_id"),
    )

    @classmethod
    def for_quiz_and_user(cls, quiz_id, user_id):
        """Attempts by one user on one quiz, most recent attempt_number first."""
        return (
            cls.query
            .filter_by(quiz_id=quiz_id, user_id=user_id)
            .order_by(cls.attempt_number.desc(), cls.id.desc())
            .all()
        )

    @classmethod
    def count_for_quiz_and_user(cls, quiz_id, user_id):
        return cls.query.filter_by(quiz_id=quiz_id, user_id=user_id).count()

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "quiz_id": self.quiz_id,
            "attempt_number": self.attempt_number,
            "score": self.score,
            "attempted_at": self.attempted_at.isoformat() if self.attempted_at else None,
        }
