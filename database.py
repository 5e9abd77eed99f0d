"""
Database Manager for NeonCalc
Handles the SQLite calculation history log
"""
import logging
import sqlite3
from datetime import datetime

import config

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, db_path=config.DB_PATH, max_items=config.MAX_HISTORY_ITEMS):
        self.db_path = db_path
        self.max_items = max_items
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize database tables"""
        conn = self.get_connection()
        cursor = conn.cursor()

        # Calculations history table
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS calculations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                expression TEXT NOT NULL,
                result TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
        ''')

        conn.commit()
        conn.close()
        logger.debug("History database ready at %s", self.db_path)

    def add_calculation(self, expression, result, timestamp=None):
        """Append a calculation and trim the log to the newest entries"""
        if timestamp is None:
            timestamp = datetime.now()
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO calculations (expression, result, timestamp)
            VALUES (?, ?, ?)
        ''', (expression, result, timestamp.strftime(config.TIMESTAMP_FORMAT)))
        calc_id = cursor.lastrowid
        cursor.execute('''
            DELETE FROM calculations WHERE id NOT IN (
                SELECT id FROM calculations ORDER BY id DESC LIMIT ?
            )
        ''', (self.max_items,))
        if cursor.rowcount:
            logger.debug("Trimmed %d old calculation(s)", cursor.rowcount)
        conn.commit()
        conn.close()
        return calc_id

    def get_calculations(self, limit=config.MAX_HISTORY_ITEMS, since=None):
        """Retrieve calculations newest first, optionally only those after `since`"""
        conn = self.get_connection()
        cursor = conn.cursor()

        query = 'SELECT expression, result, timestamp FROM calculations WHERE 1=1'
        params = []
        if since is not None:
            query += ' AND timestamp >= ?'
            params.append(since.strftime(config.TIMESTAMP_FORMAT))
        query += ' ORDER BY id DESC LIMIT ?'
        params.append(limit)

        cursor.execute(query, params)
        calculations = cursor.fetchall()
        conn.close()
        return calculations

    def clear_history(self):
        """Delete every calculation"""
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('DELETE FROM calculations')
        conn.commit()
        conn.close()
        logger.info("Calculation history cleared")
