"""
Anthropic Claude narrator — uses tool_use to enforce JSON output.
"""
from __future__ import annotations
import os

import anthropic

from village.narrators.base import Narrator
from village.prompts.builder import SYSTEM_PROMPT, build_attack_prompt, result_schema

REPORT_TOOL = {
    "name": "report_battle",
    "description": "Report the outcome of the raid: story, loot and losses.",
    "input_schema": result_schema(),
}


class AnthropicNarrator(Narrator):
    def __init__(self, model_id: str):
        super().__init__(model_id)
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise EnvironmentError(
                "ANTHROPIC_API_KEY is not set. "
                "Export it with: export ANTHROPIC_API_KEY=sk-ant-..."
            )
        self._client = anthropic.Anthropic(api_key=api_key)

    def narrate(self, troops: int) -> dict:
        try:
            response = self._client.messages.create(
                model=self.model_id,
                max_tokens=512,
                system=SYSTEM_PROMPT,
                tools=[REPORT_TOOL],
                tool_choice={"type": "tool", "name": REPORT_TOOL["name"]},
                messages=[{"role": "user", "content": build_attack_prompt(troops)}],
            )
        except anthropic.APIError as e:
            raise RuntimeError(f"Anthropic API error: {e}") from e

        for block in response.content:
            if block.type == "tool_use" and block.name == REPORT_TOOL["name"]:
                return dict(block.input)
        raise RuntimeError("Anthropic response contained no battle report")
