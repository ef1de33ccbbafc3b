import datetime


class DateTools:
    """Calendar helpers keyed on the user's local time.

    Week start days use 0 = Sunday through 6 = Saturday.
    """

    @staticmethod
    def to_local(ts: datetime.datetime) -> datetime.datetime:
        """Return ``ts`` in local time; naive values are assumed local already."""
        if ts.tzinfo is None:
            return ts
        return ts.astimezone()

    @staticmethod
    def local_day_number(ts: datetime.datetime) -> int:
        """Return an integer that increases by one per local calendar day."""
        return DateTools.to_local(ts).date().toordinal()

    @staticmethod
    def day_of_year(day: datetime.date) -> int:
        return day.timetuple().tm_yday

    @staticmethod
    def sunday_based_weekday(day: datetime.date) -> int:
        return (day.weekday() + 1) % 7

    @staticmethod
    def day_index_in_week(day: datetime.date, week_start_day: int = 1) -> int:
        """Return 0-6 where 0 is the first day of the week."""
        return (DateTools.sunday_based_weekday(day) - week_start_day + 7) % 7

    @staticmethod
    def week_start(day: datetime.date, week_start_day: int = 1) -> datetime.date:
        if isinstance(day, datetime.datetime):
            day = DateTools.to_local(day).date()
        return day - datetime.timedelta(
            days=DateTools.day_index_in_week(day, week_start_day)
        )

    @staticmethod
    def week_range(
        week_start: datetime.date,
    ) -> tuple[datetime.datetime, datetime.datetime]:
        """Return the first and last instant of the week starting on ``week_start``."""
        start = datetime.datetime.combine(week_start, datetime.time.min)
        end = datetime.datetime.combine(
            week_start + datetime.timedelta(days=6), datetime.time.max
        )
        return start, end
