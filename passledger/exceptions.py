from typing import Optional


class LedgerError(Exception):
    code = "LEDGER_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# Categories

class AuthorizationError(LedgerError):
    code = "AUTHORIZATION"


class LedgerValidationError(LedgerError):
    code = "VALIDATION"


class StateConflictError(LedgerError):
    code = "STATE_CONFLICT"


class InsufficientResourceError(LedgerError):
    code = "INSUFFICIENT_RESOURCE"


class NotFoundError(LedgerError):
    code = "NOT_FOUND"


# Authorization

class NotAuthorized(AuthorizationError):
    code = "NOT_AUTHORIZED"


# Validation

class InvalidAuthority(LedgerValidationError):
    code = "INVALID_AUTHORITY"


class InvalidTier(LedgerValidationError):
    code = "INVALID_TIER"


class InvalidPrice(LedgerValidationError):
    code = "INVALID_PRICE"


class InvalidSupply(LedgerValidationError):
    code = "INVALID_SUPPLY"


class WrongPayment(LedgerValidationError):
    code = "WRONG_PAYMENT"


class InvalidDuration(LedgerValidationError):
    code = "INVALID_DURATION"


class InvalidReward(LedgerValidationError):
    code = "INVALID_REWARD"


class InvalidAmount(LedgerValidationError):
    code = "INVALID_AMOUNT"


class StartNotFuture(LedgerValidationError):
    code = "START_NOT_FUTURE"


class NameRequired(LedgerValidationError):
    code = "NAME_REQUIRED"


class LocatorRequired(LedgerValidationError):
    code = "LOCATOR_REQUIRED"


class InvalidIdentifier(LedgerValidationError):
    code = "INVALID_IDENTIFIER"


# State conflicts

class AlreadyBound(StateConflictError):
    code = "ALREADY_BOUND"


class SupplyExhausted(StateConflictError):
    code = "SUPPLY_EXHAUSTED"


class NotActive(StateConflictError):
    code = "NOT_ACTIVE"


class NoPass(StateConflictError):
    code = "NO_PASS"


class AlreadyAttended(StateConflictError):
    code = "ALREADY_ATTENDED"


class CooldownActive(StateConflictError):
    code = "COOLDOWN_ACTIVE"


class SeriesInactive(StateConflictError):
    code = "SERIES_INACTIVE"


class SeriesSoldOut(StateConflictError):
    code = "SERIES_SOLD_OUT"


# Resources

class InsufficientBalance(InsufficientResourceError):
    code = "INSUFFICIENT_BALANCE"


# Lookups

class UnknownSeries(NotFoundError):
    code = "UNKNOWN_SERIES"


class UnknownToken(NotFoundError):
    code = "UNKNOWN_TOKEN"


class UnknownPerformance(NotFoundError):
    code = "UNKNOWN_PERFORMANCE"
