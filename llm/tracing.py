"""Best-effort Langfuse tracing of LLM generations.

Tracing never changes the outcome of a provider call: every failure while
talking to Langfuse is logged as a warning and dropped.
"""

import os
from typing import Any, Dict, Optional
from langfuse import Langfuse
from logger import get_logger

logger = get_logger()

CREDENTIAL_VARS = ("LANGFUSE_PUBLIC_KEY", "LANGFUSE_SECRET_KEY")


def langfuse_configured() -> bool:
    """True when both Langfuse credentials are present in the environment."""
    return all(os.environ.get(var) for var in CREDENTIAL_VARS)


def usage_details(usage: Optional[Dict[str, Any]]) -> Optional[Dict[str, int]]:
    """Reduce a Responses or Chat Completions usage block to Langfuse's keys."""
    if not usage:
        return None

    details = {
        "input": usage.get("input_tokens", usage.get("prompt_tokens")),
        "output": usage.get("output_tokens", usage.get("completion_tokens")),
        "total": usage.get("total_tokens"),
    }
    return {key: value for key, value in details.items() if isinstance(value, int)}


class GenerationTracer:
    """Sends one trace per provider call to Langfuse.

    Args:
        client: A configured Langfuse client.
        prefix: Prepended to trace names, e.g. "openrouter".
    """

    def __init__(self, client: Langfuse, prefix: str = "openrouter"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_env(cls, prefix: str = "openrouter") -> Optional["GenerationTracer"]:
        """Build a tracer when Langfuse credentials are set, else return None.

        The Langfuse SDK reads LANGFUSE_PUBLIC_KEY, LANGFUSE_SECRET_KEY and
        LANGFUSE_HOST itself.
        """
        if not langfuse_configured():
            logger.debug("Langfuse credentials not set - tracing disabled")
            return None

        try:
            client = Langfuse()
        except Exception as e:
            logger.warning(f"Langfuse client setup failed: {e}")
            return None

        logger.info("Langfuse tracing enabled")
        return cls(client, prefix=prefix)

    def log_generation(
        self,
        name: str,
        model: str,
        input: Any,
        output: Any,
        usage: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record one generation under a trace named "<prefix>.<name>"."""
        try:
            span = self.client.start_span(name=f"{self.prefix}.{name}", input=input)
            generation = span.start_generation(
                name=name,
                model=model,
                input=input,
                output=output,
                usage_details=usage_details(usage),
            )
            generation.end()
            span.update(output=output)
            span.update_trace(input=input, output=output)
            span.end()
        except Exception as e:
            logger.warning(f"Langfuse logging failed: {e}")

    def flush(self) -> None:
        """Push buffered events; call before the process exits."""
        try:
            self.client.flush()
        except Exception as e:
            logger.warning(f"Langfuse flush failed: {e}")
