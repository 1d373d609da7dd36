"""
Data-binding selectors.

WidgetDataType is the contract boundary with the rest of the application:
the document only names the value it wants; the reading-plan, prayer,
habit, mood and clock services supply it at render time.
"""

from enum import Enum


class DataCategory(str, Enum):
    """Grouping of data types for pickers."""
    SCRIPTURE = "Scripture"
    READING = "Reading"
    PRAYER = "Prayer"
    HABITS = "Habits"
    DATE_TIME = "Date & Time"
    COUNTDOWN = "Countdown"
    MOOD = "Mood"

    @property
    def icon(self) -> str:
        return {
            DataCategory.SCRIPTURE: "book.fill",
            DataCategory.READING: "bookmark.fill",
            DataCategory.PRAYER: "hands.sparkles",
            DataCategory.HABITS: "checkmark.circle.fill",
            DataCategory.DATE_TIME: "calendar",
            DataCategory.COUNTDOWN: "timer",
            DataCategory.MOOD: "heart.fill",
        }[self]


class WidgetDataType(str, Enum):
    # Verse data
    VERSE_TEXT = "verseText"
    VERSE_REFERENCE = "verseReference"
    VERSE_BOOK = "verseBook"
    VERSE_CHAPTER = "verseChapter"
    VERSE_NUMBER = "verseNumber"

    # Progress data
    READING_PROGRESS = "readingProgress"
    READING_STREAK = "readingStreak"
    CURRENT_PLAN_DAY = "currentPlanDay"
    TOTAL_PLAN_DAYS = "totalPlanDays"
    PLAN_NAME = "planName"

    # Prayer data
    ACTIVE_PRAYER_COUNT = "activePrayerCount"
    ANSWERED_PRAYER_COUNT = "answeredPrayerCount"

    # Habit data
    HABIT_PROGRESS = "habitProgress"
    COMPLETED_HABITS = "completedHabits"
    TOTAL_HABITS = "totalHabits"
    HABIT_STREAK = "habitStreak"

    # Date/Time
    CURRENT_DATE = "currentDate"
    CURRENT_TIME = "currentTime"
    DAY_OF_WEEK = "dayOfWeek"
    MONTH_YEAR = "monthYear"

    # Countdown
    DAYS_REMAINING = "daysRemaining"
    COUNTDOWN_TITLE = "countdownTitle"

    # Mood/Gratitude
    LAST_MOOD = "lastMood"
    GRATITUDE_STREAK = "gratitudeStreak"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def category(self) -> DataCategory:
        return _CATEGORIES[self]

    @classmethod
    def in_category(cls, category: DataCategory) -> list['WidgetDataType']:
        return [data_type for data_type in cls if data_type.category is category]


_DISPLAY_NAMES = {
    WidgetDataType.VERSE_TEXT: "Verse Text",
    WidgetDataType.VERSE_REFERENCE: "Verse Reference",
    WidgetDataType.VERSE_BOOK: "Book Name",
    WidgetDataType.VERSE_CHAPTER: "Chapter",
    WidgetDataType.VERSE_NUMBER: "Verse Number",
    WidgetDataType.READING_PROGRESS: "Reading Progress",
    WidgetDataType.READING_STREAK: "Reading Streak",
    WidgetDataType.CURRENT_PLAN_DAY: "Current Day",
    WidgetDataType.TOTAL_PLAN_DAYS: "Total Days",
    WidgetDataType.PLAN_NAME: "Plan Name",
    WidgetDataType.ACTIVE_PRAYER_COUNT: "Active Prayers",
    WidgetDataType.ANSWERED_PRAYER_COUNT: "Answered Prayers",
    WidgetDataType.HABIT_PROGRESS: "Habit Progress",
    WidgetDataType.COMPLETED_HABITS: "Completed Habits",
    WidgetDataType.TOTAL_HABITS: "Total Habits",
    WidgetDataType.HABIT_STREAK: "Habit Streak",
    WidgetDataType.CURRENT_DATE: "Current Date",
    WidgetDataType.CURRENT_TIME: "Current Time",
    WidgetDataType.DAY_OF_WEEK: "Day of Week",
    WidgetDataType.MONTH_YEAR: "Month & Year",
    WidgetDataType.DAYS_REMAINING: "Days Remaining",
    WidgetDataType.COUNTDOWN_TITLE: "Countdown Title",
    WidgetDataType.LAST_MOOD: "Last Mood",
    WidgetDataType.GRATITUDE_STREAK: "Gratitude Streak",
}

_CATEGORY_MEMBERS = {
    DataCategory.SCRIPTURE: (
        WidgetDataType.VERSE_TEXT, WidgetDataType.VERSE_REFERENCE, WidgetDataType.VERSE_BOOK,
        WidgetDataType.VERSE_CHAPTER, WidgetDataType.VERSE_NUMBER,
    ),
    DataCategory.READING: (
        WidgetDataType.READING_PROGRESS, WidgetDataType.READING_STREAK,
        WidgetDataType.CURRENT_PLAN_DAY, WidgetDataType.TOTAL_PLAN_DAYS, WidgetDataType.PLAN_NAME,
    ),
    DataCategory.PRAYER: (
        WidgetDataType.ACTIVE_PRAYER_COUNT, WidgetDataType.ANSWERED_PRAYER_COUNT,
    ),
    DataCategory.HABITS: (
        WidgetDataType.HABIT_PROGRESS, WidgetDataType.COMPLETED_HABITS,
        WidgetDataType.TOTAL_HABITS, WidgetDataType.HABIT_STREAK,
    ),
    DataCategory.DATE_TIME: (
        WidgetDataType.CURRENT_DATE, WidgetDataType.CURRENT_TIME,
        WidgetDataType.DAY_OF_WEEK, WidgetDataType.MONTH_YEAR,
    ),
    DataCategory.COUNTDOWN: (
        WidgetDataType.DAYS_REMAINING, WidgetDataType.COUNTDOWN_TITLE,
    ),
    DataCategory.MOOD: (
        WidgetDataType.LAST_MOOD, WidgetDataType.GRATITUDE_STREAK,
    ),
}

_CATEGORIES = {
    data_type: category
    for category, members in _CATEGORY_MEMBERS.items()
    for data_type in members
}


class DataFormatStyle(str, Enum):
    DEFAULT = "default"
    SHORT = "short"
    LONG = "long"
    NUMERIC = "numeric"
    PERCENTAGE = "percentage"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()
