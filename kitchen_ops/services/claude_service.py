"""
Claude API service wrapper
"""
from anthropic import AsyncAnthropic
from kitchen_ops.config import get_settings
from typing import Optional, Dict, Any
import json

settings = get_settings()

JSON_ONLY_INSTRUCTIONS = """

IMPORTANT: Respond with ONLY a valid JSON object matching this schema:
{schema}

No markdown, no code fences, no commentary. Return the raw JSON object."""

# Checklist drafting wants some variety between runs
STRUCTURED_TEMPERATURE = 0.7


class AIServiceUnavailable(RuntimeError):
    """No API key configured"""


class ClaudeService:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        api_key = api_key or settings.ANTHROPIC_API_KEY or None
        self.model = model or settings.CLAUDE_MODEL
        self.max_tokens = settings.CLAUDE_MAX_TOKENS
        self.client = AsyncAnthropic(api_key=api_key) if api_key else None

    @property
    def is_available(self) -> bool:
        return self.client is not None

    async def generate_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 1.0,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Single-turn completion; returns the text of the first content block.

        Raises:
            AIServiceUnavailable: ANTHROPIC_API_KEY is not set
        """
        if not self.is_available:
            raise AIServiceUnavailable("AI service not configured: ANTHROPIC_API_KEY is not set")

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens or self.max_tokens,
            temperature=temperature,
            system=system_prompt or "",
            messages=[{"role": "user", "content": prompt}],
        )
        return response.content[0].text

    async def generate_structured_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_format: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Ask for a JSON object shaped like response_format and parse it"""
        schema = json.dumps(response_format or {}, indent=2)
        response_text = await self.generate_response(
            prompt=prompt + JSON_ONLY_INSTRUCTIONS.format(schema=schema),
            system_prompt=system_prompt,
            temperature=STRUCTURED_TEMPERATURE,
        )
        return parse_json_response(response_text)


def parse_json_response(response_text: str) -> Dict[str, Any]:
    """Strip an optional ``` / ```json fence and parse the body"""
    text = response_text.strip()
    for fence in ("```json", "```"):
        if text.startswith(fence):
            text = text[len(fence):]
            break
    if text.endswith("```"):
        text = text[:-3]
    text = text.strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse Claude response as JSON: {e}\n\nResponse: {text}")


# Singleton instance
claude_service = ClaudeService()
