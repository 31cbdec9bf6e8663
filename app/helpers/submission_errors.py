from typing import Optional
from uuid import UUID


class StorageError(Exception):
    """
    A repository could not complete a read or write.
    Raised for infrastructure problems, never for a bad submission.
    """


class DuplicateResultError(StorageError):
    """
    The storage layer refused a second result for the same (quiz, user).
    """

    def __init__(self, quiz_id: UUID, user_id: UUID):
        super().__init__(f"Result already exists for quiz {quiz_id} and user {user_id}")
        self.quiz_id = quiz_id
        self.user_id = user_id


class ResultLinkError(StorageError):
    """
    The result was persisted but adding it to the quiz or user aggregate failed.
    The result is kept; retrying the link step is safe.
    """

    def __init__(
        self,
        result_id: UUID,
        quiz_id: UUID,
        user_id: Optional[UUID],
        stage: str = "persisted",
    ):
        super().__init__(f"Result {result_id} was saved but could not be linked")
        self.result_id = result_id
        self.quiz_id = quiz_id
        self.user_id = user_id
        # Last state the submission reached
        self.stage = stage
