"""Protocol layer: frame codec, command codes, and response headers."""

from .framing import ACK_FRAME, ERR_FRAME, Frame, FrameKind, build_frame, parse_frame
from .commands import Command, build_request, parse_response
