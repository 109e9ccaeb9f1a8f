"""
Prompt builder for analyzer requests.

Responsible for:
- Loading and rendering the packaged Jinja2 analysis template
- Embedding the output schema, with enum domains taken from the model enums
- Inserting the email text verbatim, exactly once
- Constructing the AnalysisPayload (model, token budget, single user message)
"""

from typing import Optional
from jinja2 import Environment, PackageLoader, StrictUndefined
import structlog

from risk_analyzer.models.enums import Confidence, RiskLevel, Severity
from risk_analyzer.models.request_models import AnalysisPayload, Message


logger = structlog.get_logger(__name__)

TEMPLATE_NAME = "analysis_prompt.txt"


class PromptBuilder:
    """
    Build analyzer payloads from raw email text.

    The builder performs no I/O after construction and cannot fail for a
    string input. Callers must not pass empty text; the service enforces
    that before building.
    """

    def __init__(
        self,
        default_model: str = "claude-sonnet-4-20250514",
        default_max_tokens: int = 1000,
        default_temperature: Optional[float] = None,
        template_name: str = TEMPLATE_NAME,
    ):
        """
        Initialize prompt builder.

        Args:
            default_model: Model identifier sent with every request
            default_max_tokens: Token budget for the reply
            default_temperature: Sampling temperature (omitted when None)
            template_name: Template file inside risk_analyzer/prompts
        """
        self.default_model = default_model
        self.default_max_tokens = default_max_tokens
        self.default_temperature = default_temperature

        self.jinja_env = Environment(
            loader=PackageLoader("risk_analyzer", "prompts"),
            autoescape=False,  # Prompt text, not HTML: the email must pass through untouched
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )
        self.template = self.jinja_env.get_template(template_name)

        # Schema-side variables never change between requests
        self._schema_vars = {
            "risk_levels": [level.value for level in RiskLevel.assessable()],
            "confidence_levels": Confidence.values(),
            "severity_levels": Severity.values(),
        }

        logger.info(
            "PromptBuilder initialized",
            template=template_name,
            model=default_model,
            max_tokens=default_max_tokens,
        )

    def build_prompt(self, email_text: str) -> str:
        """
        Render the analysis instruction with the email embedded.

        Args:
            email_text: Email text, inserted as-is

        Returns:
            Complete prompt text
        """
        return self.template.render(email_text=email_text, **self._schema_vars)

    def build(
        self,
        email_text: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> AnalysisPayload:
        """
        Build the complete analyzer payload.

        Args:
            email_text: Email text (non-empty; not checked here)
            model: Override default model
            max_tokens: Override default token budget

        Returns:
            AnalysisPayload with a single user message
        """
        prompt = self.build_prompt(email_text)
        payload = AnalysisPayload(
            model=model or self.default_model,
            max_tokens=max_tokens or self.default_max_tokens,
            messages=(Message(role="user", content=prompt),),
            temperature=self.default_temperature,
        )

        logger.debug(
            "Analysis payload built",
            model=payload.model,
            max_tokens=payload.max_tokens,
            email_text_length=len(email_text),
            prompt_length=len(prompt),
        )
        return payload
