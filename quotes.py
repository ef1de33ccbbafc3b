import datetime
from dataclasses import dataclass
from typing import Optional, Sequence, TypeVar

from algorithms import DateTools

T = TypeVar("T")


@dataclass(frozen=True)
class Quote:
    text: str
    author: str


DAILY_QUOTES: list[Quote] = [
    Quote("Do not wish the weight were lighter; wish that you were stronger.", "Epictetus"),
    Quote(
        "If it is endurable, then endure it. If it is not, lower the weight with dignity.",
        "Marcus Aurelius",
    ),
    Quote("Waste no more time arguing what swole is. Be swole.", "Marcus Aurelius"),
    Quote("The unexamined training plan is not worth following.", "Socrates"),
    Quote("Know thy limits, and then approach them carefully.", "Socrates"),
    Quote(
        "He who conquers the bar is strong; he who conquers himself is powerful.",
        "Laozi",
    ),
    Quote("One must imagine Sisyphus happy on leg day.", "Camus"),
    Quote("He who has a why can endure almost any set.", "Nietzsche"),
    Quote("I train, therefore I am sore.", "Descartes"),
    Quote("Virtue is a habit, as is proper depth.", "Aristotle"),
    Quote("We suffer more in imagination than under the bar.", "Seneca"),
    Quote("The will is tested not by thought, but by that last rep.", "Kant"),
    Quote("The bar teaches faster than thought ever could.", "Bruce Lee"),
    Quote(
        "The softest water wears down the hardest stone; the smallest habit shapes the greatest strength.",
        "Laozi",
    ),
]


def select_by_day(items: Sequence[T], day: datetime.date) -> Optional[T]:
    """Pick an item deterministically from the day of the year."""
    if not items:
        return None
    return items[DateTools.day_of_year(day) % len(items)]


def daily_quote(day: Optional[datetime.date] = None) -> Optional[Quote]:
    return select_by_day(DAILY_QUOTES, day or datetime.date.today())
