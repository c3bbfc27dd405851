from typing import List, Tuple

from sqlalchemy import func
from sqlmodel import Session, select

# keeps (page - 1) * page_size well inside a 64-bit OFFSET
MAX_PAGE = 1_000_000


def clamp_page(page: int, page_size: int, maximum: int) -> Tuple[int, int]:
    """One-indexed page, page size forced into [1, maximum]."""
    return max(1, page), max(1, min(maximum, page_size))


def paginate(session: Session, statement, page: int, page_size: int) -> Tuple[List, int]:
    """
    Run an ordered select for one page.

    Returns the page's rows and the total number of rows the statement
    matches, so callers can work out the page count.
    """
    count_statement = select(func.count()).select_from(statement.order_by(None).subquery())
    total = session.exec(count_statement).one()
    rows = session.exec(statement.offset((page - 1) * page_size).limit(page_size)).all()
    return list(rows), total
