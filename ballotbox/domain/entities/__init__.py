"""Domain entities."""

from ballotbox.domain.entities.ballot import Ballot
from ballotbox.domain.entities.base import BaseEntity
from ballotbox.domain.entities.candidate import Candidate
from ballotbox.domain.entities.position import Position
from ballotbox.domain.entities.publication_record import PublicationRecord
from ballotbox.domain.entities.voter_profile import VoterProfile


__all__ = [
    "Ballot",
    "BaseEntity",
    "Candidate",
    "Position",
    "PublicationRecord",
    "VoterProfile",
]
