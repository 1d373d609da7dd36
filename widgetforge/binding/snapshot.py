"""
WidgetDataSnapshot - shared application data a widget can bind to.

The reading-plan, prayer, habit, countdown and mood services write a
snapshot of their current values; SnapshotProvider serves it to the
resolver through the data-provider contract. Fields the services have not
written yet stay None and resolve to the binding's empty text.
"""

import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from pydantic import Field

from ..layers import WidgetDataType, WidgetModel
from .formatting import RawValue

# "John 3:16", "1 Corinthians 13:4-7", "Psalm 23"
_REFERENCE_PATTERN = re.compile(r'^\s*(?P<book>.+?)\s+(?P<chapter>\d+)(?::(?P<verse>\d+))?')

_PLACEHOLDER_VERSE = (
    '"For God so loved the world, that he gave his only Son, that whoever '
    'believes in him should not perish but have eternal life."'
)


class FavoriteVerse(WidgetModel):
    reference: str
    text: str
    book_name: str = Field(alias='bookName')
    chapter: int
    verse: int


class WidgetDataSnapshot(WidgetModel):
    """
    Values shared with widgets.

    Serialization format:
    {
        "verseOfDayText": "...",
        "verseOfDayReference": "John 3:16",
        "readingPlanName": "Getting Started",
        "readingProgress": 0.4,
        "readingStreak": 7,
        "currentDay": 12,
        "totalDays": 30,
        "activePrayerCount": 5,
        "answeredPrayerCount": 12,
        "todayHabitProgress": 0.6,
        "completedHabits": 3,
        "totalHabits": 5,
        "habitStreak": 7,
        "countdownTitle": "Easter",
        "countdownTargetDate": "2026-04-05T00:00:00Z",
        "lastMood": "😊",
        "gratitudeStreak": 5,
        "todayGratitudeCompleted": false,
        "favoriteVerses": [],
        "lastUpdated": null
    }
    """

    # Scripture
    verse_of_day_text: Optional[str] = Field(default=None, alias='verseOfDayText')
    verse_of_day_reference: Optional[str] = Field(default=None, alias='verseOfDayReference')

    # Reading plan
    reading_plan_name: Optional[str] = Field(default=None, alias='readingPlanName')
    reading_progress: Optional[float] = Field(default=None, alias='readingProgress')
    reading_streak: Optional[int] = Field(default=None, alias='readingStreak')
    current_day: Optional[int] = Field(default=None, alias='currentDay')
    total_days: Optional[int] = Field(default=None, alias='totalDays')

    # Prayer
    active_prayer_count: Optional[int] = Field(default=None, alias='activePrayerCount')
    answered_prayer_count: Optional[int] = Field(default=None, alias='answeredPrayerCount')

    # Habits
    today_habit_progress: Optional[float] = Field(default=None, alias='todayHabitProgress')
    completed_habits: Optional[int] = Field(default=None, alias='completedHabits')
    total_habits: Optional[int] = Field(default=None, alias='totalHabits')
    habit_streak: Optional[int] = Field(default=None, alias='habitStreak')

    # Countdown
    countdown_title: Optional[str] = Field(default=None, alias='countdownTitle')
    countdown_target_date: Optional[datetime] = Field(default=None, alias='countdownTargetDate')

    # Mood / gratitude
    last_mood: Optional[str] = Field(default=None, alias='lastMood')
    gratitude_streak: Optional[int] = Field(default=None, alias='gratitudeStreak')
    today_gratitude_completed: Optional[bool] = Field(default=None, alias='todayGratitudeCompleted')

    favorite_verses: list[FavoriteVerse] = Field(default_factory=list, alias='favoriteVerses')
    last_updated: Optional[datetime] = Field(default=None, alias='lastUpdated')

    @classmethod
    def placeholder(cls, now: Optional[datetime] = None) -> 'WidgetDataSnapshot':
        """Sample data for previews and the template gallery."""
        now = now or datetime.now()
        return cls(
            verse_of_day_text=_PLACEHOLDER_VERSE,
            verse_of_day_reference='John 3:16',
            reading_plan_name='Getting Started',
            reading_progress=0.4,
            reading_streak=7,
            current_day=12,
            total_days=30,
            active_prayer_count=5,
            answered_prayer_count=12,
            today_habit_progress=0.6,
            completed_habits=3,
            total_habits=5,
            habit_streak=7,
            countdown_title='Easter',
            countdown_target_date=now + timedelta(days=14),
            last_mood='😊',
            gratitude_streak=5,
            today_gratitude_completed=False,
            favorite_verses=[
                FavoriteVerse(reference='John 3:16', text='For God so loved...',
                              book_name='John', chapter=3, verse=16),
                FavoriteVerse(reference='Psalm 23:1', text='The Lord is my shepherd...',
                              book_name='Psalms', chapter=23, verse=1),
            ],
            last_updated=now,
        )


def parse_reference(reference: str) -> Optional[tuple[str, int, Optional[int]]]:
    """
    Split a verse reference into (book, chapter, verse).

    Returns:
        Tuple with verse None for chapter-only references, or None if the
        reference has no chapter number
    """
    match = _REFERENCE_PATTERN.match(reference)
    if match is None:
        return None
    verse = match.group('verse')
    return match.group('book'), int(match.group('chapter')), int(verse) if verse else None


def _local_date(value: datetime, reference: datetime) -> date:
    """Calendar date of value as seen in reference's timezone."""
    if value.tzinfo is None:
        return value.date()
    if reference.tzinfo is None:
        return value.astimezone().date()
    return value.astimezone(reference.tzinfo).date()


class SnapshotProvider:
    """
    Data provider backed by a WidgetDataSnapshot.

    Date and time values come from the clock (datetime.now by default) so
    tests and previews can pin them.

    Example:
        provider = SnapshotProvider(snapshot)
        resolve_binding(config, provider)
    """

    def __init__(self, snapshot: WidgetDataSnapshot, clock: Callable[[], datetime] = datetime.now):
        self.snapshot = snapshot
        self.clock = clock

    def __call__(self, data_type: WidgetDataType) -> Optional[RawValue]:
        return self.lookup(data_type)

    def _reference_part(self, index: int) -> Optional[RawValue]:
        reference = self.snapshot.verse_of_day_reference
        if not reference:
            return None
        parts = parse_reference(reference)
        return None if parts is None else parts[index]

    def days_remaining(self) -> Optional[timedelta]:
        """Whole calendar days from today to the countdown target."""
        target = self.snapshot.countdown_target_date
        if target is None:
            return None
        now = self.clock()
        return timedelta(days=(_local_date(target, now) - now.date()).days)

    def lookup(self, data_type: WidgetDataType) -> Optional[RawValue]:
        snapshot = self.snapshot
        if data_type in (WidgetDataType.CURRENT_DATE, WidgetDataType.CURRENT_TIME,
                         WidgetDataType.DAY_OF_WEEK, WidgetDataType.MONTH_YEAR):
            return self.clock()
        if data_type is WidgetDataType.VERSE_BOOK:
            return self._reference_part(0)
        if data_type is WidgetDataType.VERSE_CHAPTER:
            return self._reference_part(1)
        if data_type is WidgetDataType.VERSE_NUMBER:
            return self._reference_part(2)
        if data_type is WidgetDataType.DAYS_REMAINING:
            return self.days_remaining()

        fields = {
            WidgetDataType.VERSE_TEXT: snapshot.verse_of_day_text,
            WidgetDataType.VERSE_REFERENCE: snapshot.verse_of_day_reference,
            WidgetDataType.READING_PROGRESS: snapshot.reading_progress,
            WidgetDataType.READING_STREAK: snapshot.reading_streak,
            WidgetDataType.CURRENT_PLAN_DAY: snapshot.current_day,
            WidgetDataType.TOTAL_PLAN_DAYS: snapshot.total_days,
            WidgetDataType.PLAN_NAME: snapshot.reading_plan_name,
            WidgetDataType.ACTIVE_PRAYER_COUNT: snapshot.active_prayer_count,
            WidgetDataType.ANSWERED_PRAYER_COUNT: snapshot.answered_prayer_count,
            WidgetDataType.HABIT_PROGRESS: snapshot.today_habit_progress,
            WidgetDataType.COMPLETED_HABITS: snapshot.completed_habits,
            WidgetDataType.TOTAL_HABITS: snapshot.total_habits,
            WidgetDataType.HABIT_STREAK: snapshot.habit_streak,
            WidgetDataType.COUNTDOWN_TITLE: snapshot.countdown_title,
            WidgetDataType.LAST_MOOD: snapshot.last_mood,
            WidgetDataType.GRATITUDE_STREAK: snapshot.gratitude_streak,
        }
        return fields.get(data_type)


_PLACEHOLDER_TEXT = {
    WidgetDataType.VERSE_TEXT: '"For God so loved the world that he gave his one and only Son..."',
    WidgetDataType.VERSE_REFERENCE: 'John 3:16',
    WidgetDataType.READING_PROGRESS: '45%',
    WidgetDataType.READING_STREAK: '7 days',
    WidgetDataType.CURRENT_DATE: 'January 3, 2026',
    WidgetDataType.CURRENT_TIME: '10:30 AM',
}


def placeholder_text(data_type: WidgetDataType) -> str:
    """Fixed preview text shown for a binding in the designer canvas."""
    return _PLACEHOLDER_TEXT.get(data_type, data_type.display_name)
