"""
Stage 2: JSON Parse.

Parse the substring located by stage 1 into a Python dict.
Hard-fail stage: a malformed object cannot be normalized.
"""

import json
import structlog

from .exceptions import JSONParseError

logger = structlog.get_logger(__name__)


class Stage2JSONParse:
    """
    Stage 2 validator: parse JSON string to dict.
    
    Raises JSONParseError on malformed JSON.
    """
    
    def validate(self, content: str) -> dict:
        """
        Parse the candidate JSON object.
        
        Args:
            content: Balanced {...} substring from stage 1
            
        Returns:
            Parsed dict representation
            
        Raises:
            JSONParseError: If content is not a valid JSON object
        """
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise JSONParseError(
                f"Failed to parse analyzer reply as JSON: {e.msg}",
                raw_content=content,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}"
            ) from e
        except ValueError as e:
            # e.g. integer literals over sys.get_int_max_str_digits()
            raise JSONParseError(
                f"Failed to parse analyzer reply as JSON: {e}",
                raw_content=content,
                parse_error=str(e)
            ) from e
        except RecursionError as e:
            raise JSONParseError(
                "Analyzer reply JSON is nested too deeply",
                raw_content=content,
                parse_error="RecursionError"
            ) from e
        
        if not isinstance(parsed, dict):
            raise JSONParseError(
                f"Analyzer reply is not a JSON object (got {type(parsed).__name__})",
                raw_content=content,
                parse_error=f"Expected dict, got {type(parsed).__name__}"
            )
        
        logger.debug("Stage 2: Parsed JSON object", top_level_keys=len(parsed))
        return parsed
