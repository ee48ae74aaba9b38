"""
OpenAI GPT narrator — uses response_format={"type":"json_object"} to enforce JSON.
"""
from __future__ import annotations
import json
import os

from openai import OpenAI, OpenAIError

from village.narrators.base import Narrator
from village.prompts.builder import SYSTEM_PROMPT, build_attack_prompt

RESULT_SCHEMA_DESCRIPTION = """
Respond with ONLY a JSON object (no markdown) with this exact schema:
{
  "report": "<2-sentence battle story>",
  "goldLooted": <int>,
  "elixirLooted": <int>,
  "troopsLost": <int between 0 and the troops sent>
}
"""


class OpenAINarrator(Narrator):
    def __init__(self, model_id: str):
        super().__init__(model_id)
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise EnvironmentError(
                "OPENAI_API_KEY is not set. "
                "Export it with: export OPENAI_API_KEY=sk-..."
            )
        self._client = OpenAI(api_key=api_key)

    def narrate(self, troops: int) -> dict:
        system = SYSTEM_PROMPT + "\n\n" + RESULT_SCHEMA_DESCRIPTION
        try:
            response = self._client.chat.completions.create(
                model=self.model_id,
                max_tokens=512,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": build_attack_prompt(troops)},
                ],
            )
            content = response.choices[0].message.content or "{}"
            return json.loads(content)
        except (OpenAIError, json.JSONDecodeError) as e:
            raise RuntimeError(f"OpenAI API error: {e}") from e
