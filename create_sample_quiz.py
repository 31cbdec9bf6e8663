import asyncio
from sqlalchemy import select
from app.database import AsyncSessionLocal
from app.models import User, Quiz, QuizQuestion, QuizAnswer
from app.auth.jwt import create_access_token


async def create_sample_quiz_interactive():
    """
    Create a quiz owner and a two-question quiz for local testing,
    then print the quiz id and an access token for the owner.
    """
    username = input("Enter owner username: ").strip()
    title = input("Enter quiz title: ").strip() or "Sample quiz"
    allow_multiple = input("Allow multiple responses? [y/N]: ").strip().lower() == "y"
    show_correct = input("Show correct answers? [y/N]: ").strip().lower() == "y"

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.username == username))
        owner = result.scalar_one_or_none()
        if not owner:
            owner = User(username=username)
            session.add(owner)
            await session.flush()

        quiz = Quiz(
            owner_id=owner.id,
            title=title,
            allow_multiple_responses=allow_multiple,
            show_correct_answers=show_correct,
            questions=[
                QuizQuestion(
                    question_text="2 + 2 = ?",
                    correct_answer_index=0,
                    answers=[QuizAnswer(answer_text="4"), QuizAnswer(answer_text="5")],
                ),
                QuizQuestion(
                    question_text="Capital of France?",
                    correct_answer_index=1,
                    answers=[QuizAnswer(answer_text="Lyon"), QuizAnswer(answer_text="Paris")],
                ),
            ],
        )
        session.add(quiz)
        await session.commit()

        print(f"Quiz created: {quiz.id}")
        print(f"Owner token: {create_access_token({'user_id': str(owner.id)})}")


if __name__ == "__main__":
    asyncio.run(create_sample_quiz_interactive())
