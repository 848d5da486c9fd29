"""
Naming Engine

Turns integers into the names the generated family is written with:
    - family names ("the 7-ary tuple is called Septuple")
    - ordinal and cardinal words for documentation ("third", "twenty-one")
    - accessor labels and type-parameter letters

RESERVED LETTER:
    ``T`` / ``t`` is never handed out as a position letter. The generated
    module declares ``T`` as the element type of the list projection, so a
    position type parameter named ``T`` would shadow it. That leaves a budget
    of 25 letters, which caps the family at arity 25.

All tables here are immutable constants. Nothing in this module has state.
"""

from string import ascii_lowercase
from types import MappingProxyType
from typing import List, Mapping, Tuple

from .errors import UnsupportedArity

RESERVED_LETTER = "t"

_LETTERS: Tuple[str, ...] = tuple(c for c in ascii_lowercase if c != RESERVED_LETTER)

LETTER_BUDGET = len(_LETTERS)

FAMILY_NAMES: Mapping[int, str] = MappingProxyType({
    1: "Single",
    2: "Duad",
    3: "Triad",
    4: "Quadruple",
    5: "Quintuple",
    6: "Sextuple",
    7: "Septuple",
    8: "Octuple",
    9: "Nonuple",
    10: "Decuple",
    11: "Undecuple",
    12: "Duodecuple",
    13: "Tredecuple",
    14: "Quattuordecuple",
    15: "Quindecuple",
    16: "Sexdecuple",
    17: "Septendecuple",
    18: "Octodecuple",
    19: "Novemdecuple",
    20: "Vigintuple",
    21: "Unvigintuple",
    22: "Duovigintuple",
    23: "Trevigintuple",
    24: "Quattuorvigintuple",
    25: "Quinvigintuple",
    26: "Sexvigintuple",
    27: "Septenvigintuple",
    28: "Octovigintuple",
    29: "Novemvigintuple",
    30: "Trigintuple",
    31: "Untrigintuple",
    32: "Duotriguple",
    33: "Tretriguple",
    34: "Quattuortriguple",
    35: "Quintriguple",
    36: "Sextriguple",
    37: "Septentriguple",
    38: "Octotriguple",
    39: "Novemtriguple",
    40: "Quadraguple",
    41: "Unquadraguple",
    42: "Duoquadraguple",
    43: "Trequadraguple",
    44: "Quattuorquadraguple",
    45: "Quinquadraguple",
    46: "Sexquadraguple",
    47: "Septenquadraguple",
    48: "Octoquadraguple",
    49: "Novemquadraguple",
    50: "Quinquaguple",
    51: "Unquinquaguple",
    52: "Duoquinquaguple",
    53: "Trequinquaguple",
    54: "Quattuorquinquaguple",
    55: "Quinquinquaguple",
    56: "Sexquinquaguple",
    57: "Septenquinquaguple",
    58: "Octoquinquaguple",
    59: "Novemquinquaguple",
    60: "Sexaguple",
    61: "Unsexaguple",
    62: "Duosexaguple",
    63: "Tresexaguple",
    64: "Quattuorsexaguple",
    65: "Quinsexaguple",
    66: "Sexsexaguple",
    67: "Septensexaguple",
    68: "Octosexaguple",
    69: "Novemsexaguple",
    70: "Septuaguple",
    71: "Unseptuaguple",
    72: "Duoseptuaguple",
    73: "Treseptuaguple",
    74: "Quattuorseptuaguple",
    75: "Quinseptuaguple",
    76: "Sexseptuaguple",
    77: "Septenseptuaguple",
    78: "Octoseptuaguple",
    79: "Novemseptuaguple",
    80: "Octoguple",
    81: "Unoctoguple",
    82: "Duooctoguple",
    83: "Treoctoguple",
    84: "Quattuoroctoguple",
    85: "Quinoctoguple",
    86: "Sexoctoguple",
    87: "Septoctoguple",
    88: "Octooctoguple",
    89: "Novemoctoguple",
    90: "Nonaguple",
    91: "Unnonaguple",
    92: "Duononaguple",
    93: "Trenonaguple",
    94: "Quattuornonaguple",
    95: "Quinnonaguple",
    96: "Sexnonaguple",
    97: "Septennonaguple",
    98: "Octononaguple",
    99: "Novemnonaguple",
    100: "Centuple",
})

_UNITS = (
    "zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
    "seventeen", "eighteen", "nineteen",
)

_TENS = (
    "zero", "ten", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety",
)

# cardinal word -> ordinal word, for the words that don't just take "th"
_IRREGULAR_ORDINALS: Mapping[str, str] = MappingProxyType({
    "one": "first",
    "two": "second",
    "three": "third",
    "four": "fourth",
    "five": "fifth",
    "eight": "eighth",
    "nine": "ninth",
    "twelve": "twelfth",
})

MAX_WORDS = 999


def family_name(arity: int) -> str:
    """
    Return the Latin-derived name of the ``arity``-tuple.

    Raises:
        UnsupportedArity: if ``arity`` is outside 1..100
    """
    try:
        return FAMILY_NAMES[arity]
    except KeyError:
        raise UnsupportedArity(
            f"No family name for arity {arity}, supported range is 1..{len(FAMILY_NAMES)}",
            arity=arity,
        ) from None


def cardinal(number: int) -> str:
    """
    Spell out ``number`` (0..999) in English words.

    Examples:
        21  -> "twenty-one"
        101 -> "one hundred and one"
    """
    if not 0 <= number <= MAX_WORDS:
        raise UnsupportedArity(f"Cannot spell out {number}, supported range is 0..{MAX_WORDS}", arity=number)

    if number < 20:
        return _UNITS[number]

    parts: List[str] = []
    hundreds, rest = divmod(number, 100)
    if hundreds:
        parts.append(f"{_UNITS[hundreds]} hundred")
        if rest:
            parts.append("and")
    if rest:
        if rest < 20:
            parts.append(_UNITS[rest])
        else:
            tens, units = divmod(rest, 10)
            word = _TENS[tens]
            if units:
                word = f"{word}-{_UNITS[units]}"
            parts.append(word)
    return " ".join(parts)


def ordinal(position: int) -> str:
    """
    Spell out the 1-based ``position`` as an ordinal word.

    The cardinal form is built first; only its last word changes: irregular
    words use their fixed ordinal, tens drop their "y" for "ie" and every
    other word takes "th". A leading "one " is dropped, so 100 becomes
    "hundredth".

    Examples:
        1   -> "first"
        21  -> "twenty-first"
        30  -> "thirtieth"
        100 -> "hundredth"
    """
    if not 1 <= position <= MAX_WORDS:
        raise UnsupportedArity(f"No ordinal for {position}, supported range is 1..{MAX_WORDS}", arity=position)

    words = cardinal(position)
    if words.startswith("one "):
        words = words[len("one "):]

    cut = max(words.rfind(" "), words.rfind("-")) + 1
    head, last = words[:cut], words[cut:]

    if last in _IRREGULAR_ORDINALS:
        last = _IRREGULAR_ORDINALS[last]
    elif last.endswith("y"):
        last = f"{last[:-1]}ieth"
    else:
        last = f"{last}th"
    return head + last


def position_label(index: int) -> str:
    """Return the lowercase accessor label for the 0-based position ``index``."""
    if not 0 <= index < LETTER_BUDGET:
        raise UnsupportedArity(
            f"Position {index} exceeds the letter budget of {LETTER_BUDGET}",
            arity=index + 1,
        )
    return _LETTERS[index]


def type_param(index: int) -> str:
    """Return the type-parameter name for the 0-based position ``index``."""
    return position_label(index).upper()


def position_labels(count: int) -> Tuple[str, ...]:
    return tuple(position_label(i) for i in range(count))


def type_params(count: int) -> Tuple[str, ...]:
    return tuple(type_param(i) for i in range(count))
