"""Date manipulation utilities"""

from datetime import date, timedelta


def calculate_age(birth_date: date, today: date) -> int:
    """Whole years elapsed between birth_date and today"""
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return today.year - birth_date.year - (0 if had_birthday else 1)


def vehicle_age(model_year: int, today: date) -> int:
    """Vehicle age in calendar years; negative for future model years"""
    return today.year - model_year


def add_days(from_date: date, days: int) -> date:
    """Add calendar days to a date"""
    return from_date + timedelta(days=days)
