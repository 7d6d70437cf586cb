"""OpenAI chat completions client for calorie estimation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_tracker.services.estimation import EstimationClient


@dataclass
class OpenAIEstimationClient(EstimationClient):
    """Estimation client backed by the OpenAI chat completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIEstimationClient":
        """Create an OpenAI estimation client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(
        self,
        *,
        model: str,
        system_prompt: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Send a system and user message and return the reply text."""
        completion = await self.client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not completion.choices:
            raise RuntimeError("OpenAI returned no choices")
        return completion.choices[0].message.content or ""

    async def close(self) -> None:
        await self.client.close()
