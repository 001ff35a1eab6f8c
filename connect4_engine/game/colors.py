"""
colors.py - Color token validation for player pieces

The engine only needs a yes/no answer for "is this a usable color". The
default predicate accepts CSS named colors and hex notation; callers can pass
any other `Callable[[str], bool]` to ConnectFourGame instead.
"""

import re
from typing import Callable

ColorValidator = Callable[[str], bool]

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-f]{3}|[0-9a-f]{6})$")

CSS_COLOR_NAMES = frozenset("""
aliceblue antiquewhite aqua aquamarine azure beige bisque black blanchedalmond
blue blueviolet brown burlywood cadetblue chartreuse chocolate coral
cornflowerblue cornsilk crimson cyan darkblue darkcyan darkgoldenrod darkgray
darkgreen darkgrey darkkhaki darkmagenta darkolivegreen darkorange darkorchid
darkred darksalmon darkseagreen darkslateblue darkslategray darkslategrey
darkturquoise darkviolet deeppink deepskyblue dimgray dimgrey dodgerblue
firebrick floralwhite forestgreen fuchsia gainsboro ghostwhite gold goldenrod
gray green greenyellow grey honeydew hotpink indianred indigo ivory khaki
lavender lavenderblush lawngreen lemonchiffon lightblue lightcoral lightcyan
lightgoldenrodyellow lightgray lightgreen lightgrey lightpink lightsalmon
lightseagreen lightskyblue lightslategray lightslategrey lightsteelblue
lightyellow lime limegreen linen magenta maroon mediumaquamarine mediumblue
mediumorchid mediumpurple mediumseagreen mediumslateblue mediumspringgreen
mediumturquoise mediumvioletred midnightblue mintcream mistyrose moccasin
navajowhite navy oldlace olive olivedrab orange orangered orchid palegoldenrod
palegreen paleturquoise palevioletred papayawhip peachpuff peru pink plum
powderblue purple rebeccapurple red rosybrown royalblue saddlebrown salmon
sandybrown seagreen seashell sienna silver skyblue slateblue slategray
slategrey snow springgreen steelblue tan teal thistle tomato turquoise violet
wheat white whitesmoke yellow yellowgreen
""".split())


def normalize_color(token: str) -> str:
    """Return the canonical (stripped, lower case) form of a color token."""
    return token.strip().lower()


def is_color(token: str) -> bool:
    """
    Check whether a token names a color.

    Args:
        token: A CSS color name such as "red" or a hex value such as "#ff0000"

    Returns:
        True if the token is a recognised, non-empty color
    """
    if not isinstance(token, str):
        return False
    color = normalize_color(token)
    if not color:
        return False
    return color in CSS_COLOR_NAMES or bool(HEX_COLOR_PATTERN.match(color))
