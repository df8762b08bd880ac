"""Exception types for TradeJournal."""


class TradeJournalError(Exception):
    """Base class for all TradeJournal errors."""


class InvalidInputError(TradeJournalError, ValueError):
    """Raised when calculator inputs are missing, zero, or negative.

    Attributes:
        problems: One message per rejected input.
    """

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class RecordNotFoundError(TradeJournalError, LookupError):
    """Raised when a repository record does not exist."""


class DuplicateTargetError(TradeJournalError):
    """Raised when a monthly target already exists for (owner, year, month)."""


class ConfigError(TradeJournalError):
    """Raised when the configuration file cannot be parsed."""
