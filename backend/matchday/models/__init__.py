from matchday.models.match import Match, MatchStatus
from matchday.models.match_event import MatchEvent
from matchday.models.match_lineup import MatchLineup
from matchday.models.match_verification import MatchVerification
from matchday.models.notification import Notification
from matchday.models.operations_request import OperationsRequest, RequestType
from matchday.models.team import Team
from matchday.models.team_member import TeamMember
from matchday.models.tournament import Tournament
from matchday.models.tournament_entry import TournamentEntry

__all__ = [
    "Team",
    "TeamMember",
    "Match",
    "MatchStatus",
    "MatchLineup",
    "MatchEvent",
    "MatchVerification",
    "OperationsRequest",
    "RequestType",
    "Tournament",
    "TournamentEntry",
    "Notification",
]
