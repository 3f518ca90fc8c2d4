# services/business_calendar.py
import calendar
from datetime import date

import jpholiday


class BusinessCalendar:
    """営業日（平日、任意で祝日除外）の判定サービス"""

    def __init__(self, exclude_public_holidays: bool = False):
        self._exclude_public_holidays = exclude_public_holidays
        self._cache: dict[date, bool] = {}

    def is_business_day(self, target_date: date) -> bool:
        if target_date in self._cache:
            return self._cache[target_date]

        # 土日チェック
        if target_date.weekday() >= 5:
            result = False
        # 祝日チェック
        elif self._exclude_public_holidays and jpholiday.is_holiday(target_date):
            result = False
        else:
            result = True

        self._cache[target_date] = result
        return result

    def business_days_in_month(self, year: int, month: int) -> int:
        """指定月の営業日数"""
        last_day = calendar.monthrange(year, month)[1]
        return self._count(year, month, last_day)

    def business_days_through(self, year: int, month: int, as_of: date) -> int:
        """月初から as_of までの営業日数（as_of は指定月内に丸める）"""
        first = date(year, month, 1)
        last_day = calendar.monthrange(year, month)[1]
        if as_of < first:
            return 0
        if as_of > date(year, month, last_day):
            return self._count(year, month, last_day)
        return self._count(year, month, as_of.day)

    def _count(self, year: int, month: int, through_day: int) -> int:
        return sum(
            1
            for day in range(1, through_day + 1)
            if self.is_business_day(date(year, month, day))
        )
