# app/utils/dates.py

from datetime import date, datetime
from typing import Optional

# Duração média de um mês em dias
DAYS_PER_MONTH = 30.44


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """
    Converte horários com fuso para o horário local sem fuso, que é como
    o banco guarda e como a tabela de horários compara.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def age_in_months(birth_date: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()
    days = (today - birth_date).days
    return max(0, int(days // DAYS_PER_MONTH))


def minutes_between(start: datetime, end: datetime) -> int:
    return round((end - start).total_seconds() / 60)
