from models import db


class QuizAttemptAnswer(db.Model):
    __tablename__ = "quiz_attempt_answers"

    id = db.Column(db.Integer, primary_key=True)
    attempt_id = db.Column(db.Integer, db.ForeignKey("quiz_attempts.id", ondelete="CASCADE"), nullable=False, index=True)
    # No FKs: answers keep the ids as submitted, even after authoring edits.
    question_id = db.Column(db.Integer, nullable=False)
    selected_option_id = db.Column(db.Integer, nullable=True)
    # Snapshot taken at submission; later option edits do not change it.
    is_correct = db.Column(db.Boolean, nullable=False, default=False)

    attempt = db.relationship("QuizAttempt", back_populates="answers")

    def to_dict(self):
        return {
            "id": self.id,
            "attempt_id": self.attempt_id,
            "question_id": self.question_id,
            "selected_option_id": self.selected_option_id,
            "is_correct": self.is_correct,
        }
