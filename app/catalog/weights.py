"""
Numeric interpretation of free-text weight labels such as "250 g" or "1 oz".
"""
import re
from typing import Any, Dict, Optional

WEIGHT_NUMERIC_FIELD = "weightNumeric"

# Leading decimal: optional sign, digits with optional fraction, optional exponent
WEIGHT_PATTERN = r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?"
_WEIGHT_RE = re.compile(WEIGHT_PATTERN)


def parse_weight(label: Optional[Any]) -> float:
    """Leading number of a weight label, 0 when there is none."""
    if label is None:
        return 0.0
    match = _WEIGHT_RE.match(str(label).lstrip())
    if match is None:
        return 0.0
    return float(match.group())


def weight_numeric_expression(field: str = "$weight") -> Dict[str, Any]:
    """MongoDB aggregation expression computing ``parse_weight`` server side."""
    return {
        "$let": {
            "vars": {
                "found": {
                    "$regexFind": {
                        "input": {"$trim": {"input": {"$ifNull": [{"$toString": field}, ""]}}},
                        "regex": WEIGHT_PATTERN,
                    }
                }
            },
            "in": {
                "$convert": {
                    "input": "$$found.match",
                    "to": "double",
                    "onError": 0.0,
                    "onNull": 0.0,
                }
            },
        }
    }
