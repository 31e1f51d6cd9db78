"""日時フォーマットのヘルパー関数"""
from datetime import date, datetime, timezone
from typing import Optional


def today_utc(now: Optional[datetime] = None) -> date:
    """
    UTC の今日の日付を取得

    Returns:
        date: カレンダーの日付キー (YYYY-MM-DD) に使う日付
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).date()


def format_todo_date(day: date) -> str:
    """
    Todo の表示用日付フォーマット

    Returns:
        str: "07 Oct 2025" 形式の文字列
    """
    return day.strftime("%d %b %Y")
