"""Telegram bot handlers."""
import logging
from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import CallbackContext

from wordcards.exceptions import IdentityError, StoreUnavailable, UnknownCategory, WordCardsError
from wordcards.models.base import SessionLocal
from wordcards.models.progress_models import AccountContext, ProgressSnapshot
from wordcards.monitoring import quizzes_completed, signed_in_accounts
from wordcards.services.achievement_service import AchievementService
from wordcards.services.catalog_service import get_catalog
from wordcards.services.identity_service import IdentityService
from wordcards.services.progress_service import ProgressService
from wordcards.services.progress_store import ProgressStore
from wordcards.services.quiz_service import QuizService

# Get logger for this module
logger = logging.getLogger(__name__)

# Button texts
MENU = "🏠 Menu"
CATEGORIES = "📚 Categories"
VIEW_PROGRESS = "📊 Progress"
ACHIEVEMENTS = "🏆 Achievements"
FLIP = "🔄 Flip"
LEARNED = "✅ Learned"
PREVIOUS = "⬅️ Previous"
NEXT = "➡️ Next"
START_QUIZ = "▶️ Start quiz"

ERR_MSG_NOT_SIGNED_IN = (
    "Please sign in first:\n"
    "/signin <email> <password>\n"
    "or create an account:\n"
    "/signup <email> <password> [username]"
)
ERR_MSG_STORE = "Could not reach the progress store. Please try again."

# Keys in context.user_data
ACCOUNT_KEY = "account"
QUIZ_KEY = "quiz"

KB_BACK_TO_MENU = [[InlineKeyboardButton(MENU, callback_data="menu")]]


def get_account(context: CallbackContext) -> Optional[AccountContext]:
    """Get the signed-in account for the chat user."""
    return context.user_data.get(ACCOUNT_KEY)


def make_progress_service(db) -> ProgressService:
    return ProgressService(ProgressStore(db))


async def reply(update: Update, text: str, keyboard: Optional[List[List[InlineKeyboardButton]]] = None) -> None:
    """Edit the message behind a button press, or answer a typed command."""
    reply_markup = InlineKeyboardMarkup(keyboard) if keyboard else None
    if update.callback_query:
        await update.callback_query.edit_message_text(text, reply_markup=reply_markup)
    else:
        await update.message.reply_text(text, reply_markup=reply_markup)


def main_menu_keyboard() -> List[List[InlineKeyboardButton]]:
    return [
        [InlineKeyboardButton(CATEGORIES, callback_data="categories")],
        [InlineKeyboardButton(VIEW_PROGRESS, callback_data="progress")],
        [InlineKeyboardButton(ACHIEVEMENTS, callback_data="achievements")],
    ]


async def handle_start(update: Update, context: CallbackContext) -> None:
    """Show the main menu."""
    account = get_account(context)
    if not account:
        await reply(update, "Welcome to WordCards! 👋\n\n" + ERR_MSG_NOT_SIGNED_IN)
        return
    await reply(update, f"Welcome back, {account.username}! 👋\nWhat would you like to do?", main_menu_keyboard())


async def handle_signup(update: Update, context: CallbackContext) -> None:
    """/signup <email> <password> [username]"""
    if len(context.args) < 2:
        await update.message.reply_text("Usage: /signup <email> <password> [username]")
        return
    email, password = context.args[0], context.args[1]
    username = context.args[2] if len(context.args) > 2 else None

    db = SessionLocal()
    try:
        account = IdentityService(db).sign_up(email, password, username)
    except IdentityError as e:
        await update.message.reply_text(f"Sign-up failed: {e}")
        return
    finally:
        db.close()

    context.user_data[ACCOUNT_KEY] = account
    signed_in_accounts.inc()
    await update.message.reply_text(
        f"Account created. Welcome, {account.username}!",
        reply_markup=InlineKeyboardMarkup(main_menu_keyboard()),
    )


async def handle_signin(update: Update, context: CallbackContext) -> None:
    """/signin <email> <password>"""
    if len(context.args) < 2:
        await update.message.reply_text("Usage: /signin <email> <password>")
        return

    db = SessionLocal()
    try:
        account = IdentityService(db).sign_in(context.args[0], context.args[1])
    except IdentityError as e:
        await update.message.reply_text(f"Sign-in failed: {e}")
        return
    finally:
        db.close()

    if get_account(context) is None:
        signed_in_accounts.inc()
    context.user_data[ACCOUNT_KEY] = account
    await update.message.reply_text(
        f"Signed in as {account.username}.",
        reply_markup=InlineKeyboardMarkup(main_menu_keyboard()),
    )


async def handle_signout(update: Update, context: CallbackContext) -> None:
    account = context.user_data.pop(ACCOUNT_KEY, None)
    context.user_data.pop(QUIZ_KEY, None)
    if account is None:
        await update.message.reply_text("You are not signed in.")
        return

    db = SessionLocal()
    try:
        IdentityService(db).sign_out(account.token)
    finally:
        db.close()
    signed_in_accounts.dec()
    await update.message.reply_text("Signed out. See you soon!")


async def show_categories(update: Update, context: CallbackContext) -> None:
    """List catalog categories with the learner's completion."""
    account = get_account(context)
    if not account:
        await reply(update, ERR_MSG_NOT_SIGNED_IN)
        return

    db = SessionLocal()
    try:
        snapshot = make_progress_service(db).get_progress_snapshot(account)
    except StoreUnavailable:
        await reply(update, ERR_MSG_STORE, KB_BACK_TO_MENU)
        return
    finally:
        db.close()

    keyboard = []
    for category in get_catalog().list_categories():
        tracked = snapshot.get_category(category.id)
        progress = tracked.progress if tracked else 0
        keyboard.append([InlineKeyboardButton(
            f"{category.name} ({category.word_count} words, {progress}%)",
            callback_data=f"card:{category.id}:0:front",
        )])
    keyboard.extend(KB_BACK_TO_MENU)
    await reply(update, "Choose a category:", keyboard)


async def show_card(update: Update, context: CallbackContext, category_id: int, index: int, side: str) -> None:
    """Show one flashcard, front (word) or back (translation)."""
    words = get_catalog().words_in_category(category_id)
    if not words:
        await reply(update, "This category has no words.", KB_BACK_TO_MENU)
        return
    index = max(0, min(index, len(words) - 1))
    word = words[index]

    if side == "back":
        text = (f"{word.text}\n\n{word.translation} ({word.pinyin})\n\n"
                f"{word.example}\n{word.example_translation}")
        flip_to = "front"
    else:
        text = f"{word.text}\n\n[{word.difficulty.value}]"
        flip_to = "back"
    text = f"Card {index + 1}/{len(words)}\n\n{text}"

    navigation = []
    if index > 0:
        navigation.append(InlineKeyboardButton(PREVIOUS, callback_data=f"card:{category_id}:{index - 1}:front"))
    if index < len(words) - 1:
        navigation.append(InlineKeyboardButton(NEXT, callback_data=f"card:{category_id}:{index + 1}:front"))
    keyboard = [
        [InlineKeyboardButton(FLIP, callback_data=f"card:{category_id}:{index}:{flip_to}"),
         InlineKeyboardButton(LEARNED, callback_data=f"learned:{category_id}:{index}")],
        navigation,
        [InlineKeyboardButton(START_QUIZ, callback_data=f"quiz:{category_id}")],
        [InlineKeyboardButton(CATEGORIES, callback_data="categories")],
    ]
    await reply(update, text, [row for row in keyboard if row])


async def handle_learned(update: Update, context: CallbackContext, category_id: int, index: int) -> None:
    """Mark the card's word learned and move to the next card."""
    account = get_account(context)
    if not account:
        await reply(update, ERR_MSG_NOT_SIGNED_IN)
        return
    words = get_catalog().words_in_category(category_id)
    if not 0 <= index < len(words):
        await reply(update, "This card no longer exists.", KB_BACK_TO_MENU)
        return

    db = SessionLocal()
    try:
        make_progress_service(db).mark_word_learned(account, category_id, words[index].id)
    except StoreUnavailable:
        await reply(update, ERR_MSG_STORE, KB_BACK_TO_MENU)
        return
    except WordCardsError as e:
        logger.error(f"Could not mark word learned: {e}")
        await reply(update, "This card no longer exists.", KB_BACK_TO_MENU)
        return
    finally:
        db.close()

    await show_card(update, context, category_id, min(index + 1, len(words) - 1), "front")


async def start_quiz(update: Update, context: CallbackContext, category_id: int) -> None:
    try:
        quiz = QuizService(get_catalog()).build_quiz(category_id)
    except UnknownCategory:
        await reply(update, "This category no longer exists.", KB_BACK_TO_MENU)
        return
    if not quiz.questions:
        await reply(update, "No words available for a quiz.", KB_BACK_TO_MENU)
        return
    context.user_data[QUIZ_KEY] = quiz
    await show_question(update, context)


async def show_question(update: Update, context: CallbackContext, feedback: str = "") -> None:
    quiz = context.user_data.get(QUIZ_KEY)
    if quiz is None:
        await reply(update, "No quiz in progress.", KB_BACK_TO_MENU)
        return

    if quiz.finished:
        context.user_data.pop(QUIZ_KEY, None)
        quizzes_completed.labels(passed=str(quiz.passed).lower()).inc()
        verdict = "Well done! 🎉" if quiz.passed else "Keep practicing! 💪"
        await reply(
            update,
            f"{feedback}Quiz result: {quiz.percentage}%\n"
            f"You answered {quiz.score} of {quiz.total} correctly.\n{verdict}",
            [[InlineKeyboardButton(START_QUIZ, callback_data=f"quiz:{quiz.category_id}")],
             [InlineKeyboardButton(CATEGORIES, callback_data="categories")]],
        )
        return

    question = quiz.current_question
    keyboard = [
        [InlineKeyboardButton(option, callback_data=f"answer:{i}")]
        for i, option in enumerate(question.options)
    ]
    await reply(
        update,
        f"{feedback}Question {quiz.current + 1}/{quiz.total} (score: {quiz.score})\n\n"
        f"What is the translation of \"{question.prompt}\"?",
        keyboard,
    )


async def handle_answer(update: Update, context: CallbackContext, option_index: int) -> None:
    quiz = context.user_data.get(QUIZ_KEY)
    if quiz is None or quiz.finished:
        await reply(update, "No quiz in progress.", KB_BACK_TO_MENU)
        return
    question = quiz.current_question
    if not 0 <= option_index < len(question.options):
        return
    if quiz.answer(question.options[option_index]):
        feedback = "Correct! ✅\n\n"
    else:
        feedback = f"Wrong ❌ Correct answer: {question.answer}\n\n"
    await show_question(update, context, feedback)


def format_progress(snapshot: ProgressSnapshot) -> str:
    lines = [
        "📊 Your progress",
        f"Words learned: {snapshot.total_words}",
        f"Days studied: {snapshot.studied_days}",
    ]
    if snapshot.last_study_date:
        lines.append(f"Last study day: {snapshot.last_study_date.isoformat()}")
    for category in snapshot.categories:
        lines.append(f"• {category.name}: {category.progress}% ({len(category.learned_word_ids)} words)")
    if not snapshot.categories:
        lines.append("No categories studied yet.")
    return "\n".join(lines)


async def show_progress(update: Update, context: CallbackContext) -> None:
    account = get_account(context)
    if not account:
        await reply(update, ERR_MSG_NOT_SIGNED_IN)
        return

    db = SessionLocal()
    try:
        snapshot = make_progress_service(db).get_progress_snapshot(account)
    except StoreUnavailable:
        await reply(update, ERR_MSG_STORE, KB_BACK_TO_MENU)
        return
    finally:
        db.close()
    await reply(update, format_progress(snapshot), KB_BACK_TO_MENU)


async def show_achievements(update: Update, context: CallbackContext) -> None:
    account = get_account(context)
    if not account:
        await reply(update, ERR_MSG_NOT_SIGNED_IN)
        return

    db = SessionLocal()
    try:
        snapshot = make_progress_service(db).get_progress_snapshot(account)
    except StoreUnavailable:
        await reply(update, ERR_MSG_STORE, KB_BACK_TO_MENU)
        return
    finally:
        db.close()

    lines = ["🏆 Achievements"]
    for achievement in AchievementService(get_catalog()).evaluate(snapshot):
        mark = "✅" if achievement.unlocked else "🔒"
        lines.append(f"{mark} {achievement.title}: {achievement.description} "
                     f"({achievement.progress}/{achievement.target})")
    await reply(update, "\n".join(lines), KB_BACK_TO_MENU)


async def handle_callback(update: Update, context: CallbackContext) -> None:
    """Dispatch inline keyboard presses."""
    query = update.callback_query
    await query.answer()
    logger.debug(f"Callback {query.data} from user {update.effective_user.id}")

    parts = query.data.split(":")
    action = parts[0]
    try:
        if action == "menu":
            await handle_start(update, context)
        elif action == "categories":
            await show_categories(update, context)
        elif action == "progress":
            await show_progress(update, context)
        elif action == "achievements":
            await show_achievements(update, context)
        elif action == "card":
            await show_card(update, context, int(parts[1]), int(parts[2]), parts[3])
        elif action == "learned":
            await handle_learned(update, context, int(parts[1]), int(parts[2]))
        elif action == "quiz":
            await start_quiz(update, context, int(parts[1]))
        elif action == "answer":
            await handle_answer(update, context, int(parts[1]))
        else:
            logger.warning(f"Unknown callback data: {query.data}")
    except (IndexError, ValueError):
        logger.warning(f"Malformed callback data: {query.data}")
        await reply(update, "Something went wrong, let's start over.", KB_BACK_TO_MENU)
