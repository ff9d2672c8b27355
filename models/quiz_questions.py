from models import db


class Question(db.Model):
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    quiz = db.relationship("Quiz", back_populates="questions")
    options = db.relationship(
        "Option",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Option.id",
    )

    @classmethod
    def find_by_quiz(cls, quiz_id):
        return cls.query.filter_by(quiz_id=quiz_id).order_by(cls.id).all()

    def to_dict(self, include_options=False):
        data = {
            "id": self.id,
            "quiz_id": self.quiz_id,
            "text": self.text,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_options:
            data["options"] = [option.to_dict() for option in self.options]
        return data
