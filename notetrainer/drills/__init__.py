from .modes import CONCRETE_MODES, Category, QuestionMode, normalize_mode
from .question_generator import Question, QuestionGenerator

__all__ = [
    "CONCRETE_MODES",
    "Category",
    "QuestionMode",
    "normalize_mode",
    "Question",
    "QuestionGenerator",
]
