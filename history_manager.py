"""
History Manager for NeonCalc
Manages the capped calculation history
"""
from datetime import datetime, timedelta


class HistoryManager:
    def __init__(self, db):
        self.db = db

    def add_calculation(self, expression, result, timestamp=None):
        """Add a calculation to history"""
        self.db.add_calculation(expression, result, timestamp)

    def get_calculation_history(self, days=None, now=None):
        """Get (expression, result, timestamp) rows, newest first

        With `days` set only entries recorded within that many days are kept.
        """
        since = None
        if days is not None:
            since = (now or datetime.now()) - timedelta(days=days)
        return self.db.get_calculations(since=since)

    def get_history(self, days=None, now=None):
        """Get (expression, result) pairs, newest first"""
        return [(expr, result) for expr, result, _ in self.get_calculation_history(days, now)]

    def clear_calculation_history(self):
        """Clear all calculation history"""
        self.db.clear_history()

    def format_calculation_history(self, days=None):
        """Format calculation history for display"""
        formatted = []
        for expr, result, timestamp in self.get_calculation_history(days):
            formatted.append(f"{timestamp}: {expr} = {result}")
        return formatted
