"""SQLite data store for TradeJournal."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from tradejournal.db.repository import BaseTargetRepository, BaseTradeRepository
from tradejournal.errors import DuplicateTargetError, RecordNotFoundError
from tradejournal.models import AlertState, MonthlyTarget, RiskProfile, TradeRecord

logger = logging.getLogger(__name__)

# Trade fields a user may replace through an edit
EDITABLE_TRADE_FIELDS = frozenset({
    "account_id",
    "date",
    "symbol",
    "direction",
    "gross_pl",
    "fees",
    "entry_price",
    "exit_price",
    "notes",
})

# Target fields that may be replaced through an update
EDITABLE_TARGET_FIELDS = frozenset({
    "pnl_target",
    "trades_target",
    "win_rate_target",
    "current_pnl",
    "current_trades",
    "current_win_rate",
    "is_completed",
    "completed_at",
    "updated_at",
})


def _trade_from_row(row: sqlite3.Row) -> TradeRecord:
    return TradeRecord(
        id=row["id"],
        owner_id=row["owner_id"],
        account_id=row["account_id"],
        date=date.fromisoformat(row["date"]),
        symbol=row["symbol"],
        direction=row["direction"],
        gross_pl=row["gross_pl"],
        fees=row["fees"],
        entry_price=row["entry_price"],
        exit_price=row["exit_price"],
        notes=row["notes"],
    )


def _target_from_row(row: sqlite3.Row) -> MonthlyTarget:
    return MonthlyTarget(
        id=row["id"],
        owner_id=row["owner_id"],
        year=row["year"],
        month=row["month"],
        pnl_target=row["pnl_target"],
        trades_target=row["trades_target"],
        win_rate_target=row["win_rate_target"],
        current_pnl=row["current_pnl"],
        current_trades=row["current_trades"],
        current_win_rate=row["current_win_rate"],
        is_completed=bool(row["is_completed"]),
        completed_at=(
            datetime.fromisoformat(row["completed_at"]) if row["completed_at"] else None
        ),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


def _profile_from_row(row: sqlite3.Row) -> RiskProfile:
    return RiskProfile(
        id=row["id"],
        owner_id=row["owner_id"],
        name=row["name"],
        account_balance=row["account_balance"],
        risk_percent=row["risk_percent"],
        reward_ratio=row["reward_ratio"],
        trades_per_day=row["trades_per_day"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class DataStore(BaseTradeRepository, BaseTargetRepository):
    """SQLite-based data store for TradeJournal."""

    REQUIRED_TABLES = [
        "trades",
        "monthly_targets",
        "risk_profiles",
        "alert_state",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Trades table; net P&L is derived and never stored
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id TEXT NOT NULL,
                    account_id TEXT,
                    date TEXT NOT NULL,
                    symbol TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    gross_pl REAL NOT NULL,
                    fees REAL NOT NULL DEFAULT 0,
                    entry_price REAL NOT NULL DEFAULT 0,
                    exit_price REAL NOT NULL DEFAULT 0,
                    notes TEXT
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_trades_owner_date ON trades (owner_id, date)"
            )

            # Monthly targets table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS monthly_targets (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id TEXT NOT NULL,
                    year INTEGER NOT NULL,
                    month INTEGER NOT NULL,
                    pnl_target REAL NOT NULL,
                    trades_target INTEGER NOT NULL,
                    win_rate_target REAL NOT NULL,
                    current_pnl REAL NOT NULL DEFAULT 0,
                    current_trades INTEGER NOT NULL DEFAULT 0,
                    current_win_rate REAL NOT NULL DEFAULT 0,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    completed_at TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    UNIQUE(owner_id, year, month)
                )
            """)

            # Risk profiles table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS risk_profiles (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_id TEXT NOT NULL,
                    name TEXT NOT NULL,
                    account_balance REAL NOT NULL,
                    risk_percent REAL NOT NULL,
                    reward_ratio REAL NOT NULL,
                    trades_per_day INTEGER NOT NULL,
                    created_at TEXT NOT NULL,
                    UNIQUE(owner_id, name)
                )
            """)

            # Alert suppression state, one row per owner
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS alert_state (
                    owner_id TEXT PRIMARY KEY,
                    daily_loss_alert_date TEXT,
                    drawdown_alert_shown INTEGER NOT NULL DEFAULT 0
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    def create_trade(self, trade: TradeRecord) -> int:
        """Save a new trade.

        Args:
            trade: Trade to save. Its id is ignored.

        Returns:
            The ID of the saved trade.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO trades
                (owner_id, account_id, date, symbol, direction, gross_pl, fees,
                 entry_price, exit_price, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    trade.owner_id,
                    trade.account_id,
                    trade.date.isoformat(),
                    trade.symbol,
                    trade.direction.value,
                    trade.gross_pl,
                    trade.fees,
                    trade.entry_price,
                    trade.exit_price,
                    trade.notes,
                ),
            )
            conn.commit()
            trade_id = cursor.lastrowid or 0
        finally:
            conn.close()
        logger.info("Created trade %d (%s %s)", trade_id, trade.symbol, trade.date)
        return trade_id

    def get_trade(self, trade_id: int) -> Optional[TradeRecord]:
        """Get a trade by ID.

        Args:
            trade_id: Trade ID.

        Returns:
            Trade if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM trades WHERE id = ?", (trade_id,))
            row = cursor.fetchone()
            if row:
                return _trade_from_row(row)
            return None
        finally:
            conn.close()

    def list_trades(self, owner_id: str) -> list[TradeRecord]:
        """Get all trades of an owner.

        Args:
            owner_id: Owning user.

        Returns:
            Trades ordered by date descending, newest entry first within a day.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT * FROM trades
                WHERE owner_id = ?
                ORDER BY date DESC, id DESC
                """,
                (owner_id,),
            )
            return [_trade_from_row(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_trade(self, trade_id: int, **fields) -> TradeRecord:
        """Replace editable fields of a trade.

        The merged record is validated again, so the symbol is normalized
        and net P&L follows the new gross P&L and fees.

        Args:
            trade_id: Trade ID.
            **fields: Fields from EDITABLE_TRADE_FIELDS.

        Returns:
            The updated trade.

        Raises:
            RecordNotFoundError: If the trade does not exist.
            ValueError: If a field is not editable.
        """
        unknown = set(fields) - EDITABLE_TRADE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {', '.join(sorted(unknown))}")

        existing = self.get_trade(trade_id)
        if existing is None:
            raise RecordNotFoundError(f"Trade {trade_id} not found")

        updated = TradeRecord.model_validate(
            {**existing.model_dump(exclude={"net_pl"}), **fields}
        )

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE trades SET
                    account_id = ?, date = ?, symbol = ?, direction = ?, gross_pl = ?,
                    fees = ?, entry_price = ?, exit_price = ?, notes = ?
                WHERE id = ?
                """,
                (
                    updated.account_id,
                    updated.date.isoformat(),
                    updated.symbol,
                    updated.direction.value,
                    updated.gross_pl,
                    updated.fees,
                    updated.entry_price,
                    updated.exit_price,
                    updated.notes,
                    trade_id,
                ),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("Updated trade %d (%s)", trade_id, ", ".join(sorted(fields)))
        return updated

    def delete_trade(self, trade_id: int) -> None:
        """Delete a trade.

        Args:
            trade_id: ID of the trade to delete.

        Raises:
            RecordNotFoundError: If the trade does not exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
            deleted = cursor.rowcount
        finally:
            conn.close()
        if not deleted:
            raise RecordNotFoundError(f"Trade {trade_id} not found")
        logger.info("Deleted trade %d", trade_id)

    # ==================== Monthly Targets ====================

    def create_target(self, target: MonthlyTarget) -> int:
        """Save a new monthly target.

        Args:
            target: Target to save. Its id is ignored.

        Returns:
            The ID of the saved target.

        Raises:
            DuplicateTargetError: If the month already has a target.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO monthly_targets
                    (owner_id, year, month, pnl_target, trades_target, win_rate_target,
                     current_pnl, current_trades, current_win_rate, is_completed,
                     completed_at, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        target.owner_id,
                        target.year,
                        target.month,
                        target.pnl_target,
                        target.trades_target,
                        target.win_rate_target,
                        target.current_pnl,
                        target.current_trades,
                        target.current_win_rate,
                        1 if target.is_completed else 0,
                        target.completed_at.isoformat() if target.completed_at else None,
                        target.created_at.isoformat(),
                        target.updated_at.isoformat(),
                    ),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateTargetError(
                    f"Target for {target.month_key} already exists for {target.owner_id}"
                ) from e
            conn.commit()
            target_id = cursor.lastrowid or 0
        finally:
            conn.close()
        logger.info("Created target %d for %s", target_id, target.month_key)
        return target_id

    def get_target_by_id(self, target_id: int) -> Optional[MonthlyTarget]:
        """Get a monthly target by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM monthly_targets WHERE id = ?", (target_id,))
            row = cursor.fetchone()
            if row:
                return _target_from_row(row)
            return None
        finally:
            conn.close()

    def get_target(self, owner_id: str, year: int, month: int) -> Optional[MonthlyTarget]:
        """Get the target of one month.

        Args:
            owner_id: Owning user.
            year: Target year.
            month: Target month (1-12).

        Returns:
            Target if set, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT * FROM monthly_targets
                WHERE owner_id = ? AND year = ? AND month = ?
                """,
                (owner_id, year, month),
            )
            row = cursor.fetchone()
            if row:
                return _target_from_row(row)
            return None
        finally:
            conn.close()

    def list_targets(self, owner_id: str, year: Optional[int] = None) -> list[MonthlyTarget]:
        """Get targets of an owner.

        Args:
            owner_id: Owning user.
            year: Optional year filter.

        Returns:
            Targets, newest month first.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if year is not None:
                cursor.execute(
                    """
                    SELECT * FROM monthly_targets
                    WHERE owner_id = ? AND year = ?
                    ORDER BY year DESC, month DESC
                    """,
                    (owner_id, year),
                )
            else:
                cursor.execute(
                    """
                    SELECT * FROM monthly_targets
                    WHERE owner_id = ?
                    ORDER BY year DESC, month DESC
                    """,
                    (owner_id,),
                )
            return [_target_from_row(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_target(self, target_id: int, **fields) -> MonthlyTarget:
        """Replace fields of a monthly target.

        Args:
            target_id: Target ID.
            **fields: Fields from EDITABLE_TARGET_FIELDS.

        Returns:
            The updated target.

        Raises:
            RecordNotFoundError: If the target does not exist.
            ValueError: If a field may not be updated.
        """
        unknown = set(fields) - EDITABLE_TARGET_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable: {', '.join(sorted(unknown))}")

        existing = self.get_target_by_id(target_id)
        if existing is None:
            raise RecordNotFoundError(f"Target {target_id} not found")

        updated = MonthlyTarget.model_validate({**existing.model_dump(), **fields})

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                UPDATE monthly_targets SET
                    pnl_target = ?, trades_target = ?, win_rate_target = ?,
                    current_pnl = ?, current_trades = ?, current_win_rate = ?,
                    is_completed = ?, completed_at = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    updated.pnl_target,
                    updated.trades_target,
                    updated.win_rate_target,
                    updated.current_pnl,
                    updated.current_trades,
                    updated.current_win_rate,
                    1 if updated.is_completed else 0,
                    updated.completed_at.isoformat() if updated.completed_at else None,
                    updated.updated_at.isoformat(),
                    target_id,
                ),
            )
            conn.commit()
        finally:
            conn.close()
        return updated

    # ==================== Risk Profiles ====================

    def save_risk_profile(self, profile: RiskProfile) -> int:
        """Save a risk profile, replacing any profile with the same name.

        Args:
            profile: Profile to save.

        Returns:
            The ID of the saved profile.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO risk_profiles
                (owner_id, name, account_balance, risk_percent, reward_ratio,
                 trades_per_day, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    profile.owner_id,
                    profile.name,
                    profile.account_balance,
                    profile.risk_percent,
                    profile.reward_ratio,
                    profile.trades_per_day,
                    profile.created_at.isoformat(),
                ),
            )
            conn.commit()
            return cursor.lastrowid or 0
        finally:
            conn.close()

    def get_risk_profile(self, owner_id: str, name: str) -> Optional[RiskProfile]:
        """Get a risk profile by name."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM risk_profiles WHERE owner_id = ? AND name = ?",
                (owner_id, name),
            )
            row = cursor.fetchone()
            if row:
                return _profile_from_row(row)
            return None
        finally:
            conn.close()

    def list_risk_profiles(self, owner_id: str) -> list[RiskProfile]:
        """Get all risk profiles of an owner, ordered by name."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM risk_profiles WHERE owner_id = ? ORDER BY name",
                (owner_id,),
            )
            return [_profile_from_row(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def delete_risk_profile(self, owner_id: str, name: str) -> None:
        """Delete a risk profile.

        Raises:
            RecordNotFoundError: If the profile does not exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM risk_profiles WHERE owner_id = ? AND name = ?",
                (owner_id, name),
            )
            conn.commit()
            deleted = cursor.rowcount
        finally:
            conn.close()
        if not deleted:
            raise RecordNotFoundError(f"Risk profile '{name}' not found")

    # ==================== Alert State ====================

    def get_alert_state(self, owner_id: str) -> AlertState:
        """Get the alert suppression state of an owner.

        Returns:
            Stored state, or a fresh session state if none is stored.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT daily_loss_alert_date, drawdown_alert_shown
                FROM alert_state WHERE owner_id = ?
                """,
                (owner_id,),
            )
            row = cursor.fetchone()
            if row is None:
                return AlertState.new_session()
            return AlertState(
                daily_loss_alert_date=(
                    date.fromisoformat(row["daily_loss_alert_date"])
                    if row["daily_loss_alert_date"]
                    else None
                ),
                drawdown_alert_shown=bool(row["drawdown_alert_shown"]),
            )
        finally:
            conn.close()

    def save_alert_state(self, owner_id: str, state: AlertState) -> None:
        """Store the alert suppression state of an owner."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO alert_state
                (owner_id, daily_loss_alert_date, drawdown_alert_shown)
                VALUES (?, ?, ?)
                """,
                (
                    owner_id,
                    state.daily_loss_alert_date.isoformat()
                    if state.daily_loss_alert_date
                    else None,
                    1 if state.drawdown_alert_shown else 0,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
