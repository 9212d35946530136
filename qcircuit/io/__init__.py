"""Text program import and export."""

from .text_program import MNEMONICS, parse_text_program, to_text_program
from .utils import angle_str_to_float, float_to_angle_str

__all__ = [
    "MNEMONICS",
    "to_text_program",
    "parse_text_program",
    "angle_str_to_float",
    "float_to_angle_str",
]
