"""Stateless Secret Santa draws with per-participant encrypted links."""

from opendraw.derangement import Assignment, assignments, generate
from opendraw.draw import DrawResult, ShareableReference, draw_async, parse_names, reveal, run_draw
from opendraw.errors import (
    DerangementUnsatisfiable,
    DrawError,
    DuplicateParticipant,
    InsufficientParticipants,
    InvalidOrTamperedLink,
)
from opendraw.link_codec import decode, encode
from opendraw.session import SessionStore

__version__ = "0.1.0"
