"""
Domain errors raised by the matchday services.

Every error carries a stable machine ``code`` and the HTTP ``status_code``
routes should answer with. Routes translate them with ``to_http_exception``.

Categories:
- ValidationFailure (422): expected, user-facing rule violations
- ConflictError (409): lost compare-and-swap races / terminal states
- NotFoundError (404): missing rows
- IntegrityFailure (400/403): caller logic errors
- StoreUnavailableError (503): transient infrastructure failures (retryable)
"""

from fastapi import HTTPException


class MatchdayError(Exception):
    """Base exception for matchday engine errors."""

    code = "MATCHDAY_ERROR"
    status_code = 400

    def __init__(self, message: str, code: str = None):
        self.message = message
        if code:
            self.code = code
        super().__init__(message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(status_code=self.status_code, detail=f"{self.code}: {self.message}")


# ============================================================================
# Validation failures
# ============================================================================


class ValidationFailure(MatchdayError):
    status_code = 422


class WeeklyCapExceeded(ValidationFailure):
    code = "WEEKLY_CAP_EXCEEDED"


class CooldownActive(ValidationFailure):
    code = "COOLDOWN_ACTIVE"


class InsufficientEntrants(ValidationFailure):
    code = "INSUFFICIENT_ENTRANTS"


class DuplicateAvailability(ValidationFailure):
    code = "DUPLICATE_AVAILABILITY"


class InvalidRequestDetail(ValidationFailure):
    code = "INVALID_REQUEST_DETAIL"


class InvalidTournamentConfig(ValidationFailure):
    code = "INVALID_TOURNAMENT_CONFIG"


class TournamentFull(ValidationFailure):
    code = "TOURNAMENT_FULL"


class AlreadyRegistered(ValidationFailure):
    code = "ALREADY_REGISTERED"


class DuplicateTeamName(ValidationFailure):
    code = "DUPLICATE_TEAM_NAME"


class TeamRosterFull(ValidationFailure):
    code = "TEAM_ROSTER_FULL"


class AlreadyOnTeam(ValidationFailure):
    code = "ALREADY_ON_TEAM"


class CaptainCannotLeave(ValidationFailure):
    code = "CAPTAIN_CANNOT_LEAVE"


# ============================================================================
# Concurrency conflicts / terminal states
# ============================================================================


class ConflictError(MatchdayError):
    status_code = 409


class AlreadyLocked(ConflictError):
    code = "ALREADY_LOCKED"

    def __init__(self, request_id: int):
        self.request_id = request_id
        super().__init__(f"Request {request_id} was already taken by someone else")


class MatchAlreadyResolved(ConflictError):
    code = "MATCH_ALREADY_RESOLVED"

    def __init__(self, match_id: int, status: str):
        self.match_id = match_id
        self.status = status
        super().__init__(f"Match {match_id} is already {status}")


class TournamentAlreadyStarted(ConflictError):
    code = "TOURNAMENT_ALREADY_STARTED"

    def __init__(self, tournament_id: int):
        self.tournament_id = tournament_id
        super().__init__(f"Tournament {tournament_id} has already been drawn")


class RegistrationClosed(ConflictError):
    code = "REGISTRATION_CLOSED"


# ============================================================================
# Not found
# ============================================================================


class NotFoundError(MatchdayError):
    status_code = 404


class RequestNotFound(NotFoundError):
    code = "REQUEST_NOT_FOUND"

    def __init__(self, request_id: int):
        super().__init__(f"Request {request_id} not found")


class MatchNotFound(NotFoundError):
    code = "MATCH_NOT_FOUND"

    def __init__(self, match_id: int):
        super().__init__(f"Match {match_id} not found")


class TournamentNotFound(NotFoundError):
    code = "TOURNAMENT_NOT_FOUND"

    def __init__(self, tournament_id: int):
        super().__init__(f"Tournament {tournament_id} not found")


class TeamNotFound(NotFoundError):
    code = "TEAM_NOT_FOUND"

    def __init__(self, team_id: int):
        super().__init__(f"Team {team_id} not found")


# ============================================================================
# Integrity / authorization
# ============================================================================


class IntegrityFailure(MatchdayError):
    status_code = 400


class SelfAccept(IntegrityFailure):
    code = "SELF_ACCEPT"


class NotAMember(IntegrityFailure):
    code = "NOT_A_MEMBER"


class NotAuthorizedVerifier(IntegrityFailure):
    code = "NOT_AUTHORIZED_VERIFIER"
    status_code = 403


class NotOrganizer(IntegrityFailure):
    code = "NOT_ORGANIZER"
    status_code = 403


class NotACaptain(IntegrityFailure):
    """The submitter captains neither team in the match."""

    code = "NOT_A_CAPTAIN"
    status_code = 403


# ============================================================================
# Infrastructure
# ============================================================================


class StoreUnavailableError(MatchdayError):
    """The backing store could not be reached; safe for the caller to retry."""

    code = "STORE_UNAVAILABLE"
    status_code = 503
