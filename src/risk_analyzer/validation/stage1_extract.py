"""
Stage 1: JSON object extraction.

The analyzer is told to answer with JSON only but may still wrap the object
in commentary ("Sure! {...} Let me know..."). This stage finds the first
balanced, outermost {...} substring. Braces inside JSON string literals do
not count towards the balance.
"""

from typing import Optional

import structlog

from .exceptions import JSONNotFoundError

logger = structlog.get_logger(__name__)


def find_first_object(text: str) -> Optional[tuple[int, int]]:
    """
    Locate the balanced object with the lowest start index.
    
    A single pass from the first "{" keeps a stack of open braces, so
    braces that never close (stray "{" in leading prose) are skipped
    without rescanning the text.
    
    Args:
        text: Text to scan
    
    Returns:
        (start, end) slice bounds of the object, or None
    """
    start = text.find("{")
    if start == -1:
        return None
    
    open_braces: list[int] = []
    best: Optional[tuple[int, int]] = None
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            open_braces.append(index)
        elif char == "}" and open_braces:
            opened = open_braces.pop()
            if not open_braces:
                # The first brace closed: nothing can start earlier
                return opened, index + 1
            if best is None or opened < best[0]:
                best = (opened, index + 1)
    return best


class Stage1JSONExtract:
    """
    Stage 1 validator: locate the JSON object inside free text.
    
    Raises JSONNotFoundError when the reply has no balanced object.
    """
    
    def validate(self, content: str) -> str:
        """
        Return the first balanced {...} substring of the reply.
        
        An unterminated brace in leading prose does not hide a well-formed
        object after it.
        
        Raises:
            JSONNotFoundError: No balanced object in the reply
        """
        bounds = find_first_object(content)
        if bounds is None:
            raise JSONNotFoundError(
                "No JSON object found in analyzer reply",
                raw_content=content,
            )
        
        start, end = bounds
        logger.debug(
            "Stage 1: JSON object located",
            start=start,
            end=end,
            leading_chars=start,
            trailing_chars=len(content) - end,
        )
        return content[start:end]
