"""
Base class for the LLM-backed assistants
"""
from abc import ABC, abstractmethod
from kitchen_ops.services.claude_service import ClaudeService, claude_service
from typing import Dict, Any, Optional


class BaseAgent(ABC):
    """
    Holds a Claude client (the shared singleton unless one is injected)
    and exposes the structured-response call agents build on.
    """

    def __init__(self, name: str, claude: Optional[ClaudeService] = None):
        self.name = name
        self.claude = claude or claude_service

    @property
    def model_name(self) -> str:
        return self.claude.model

    @abstractmethod
    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Run the action named in context["action"]"""

    async def generate_structured_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_format: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self.claude.generate_structured_response(
            prompt, system_prompt, response_format
        )
