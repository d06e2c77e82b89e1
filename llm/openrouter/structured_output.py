"""Chat completion calls that must answer with JSON matching a schema."""

from typing import Any, Dict
from logger import get_logger

logger = get_logger()

NULL_VALUE = "null"


def normalize_null(value: Any) -> Any:
    """Map the "null" sentinel the schema allows back to None."""
    if value == NULL_VALUE:
        return None
    return value


def request_structured_output(
    client,
    model: str,
    rendered_prompt: Dict[str, Any],
    schema_name: str,
    schema: Dict[str, Any],
) -> str:
    """Send a rendered prompt and return the raw JSON text of the answer.

    Args:
        client: OpenAI SDK client pointed at OpenRouter.
        model: Model identifier.
        rendered_prompt: Output of PromptManager.render_prompt.
        schema_name: Name reported to the API for the JSON schema.
        schema: Strict JSON schema the answer must follow.

    Raises:
        ValueError: If the model returned no content.
    """
    parameters = rendered_prompt["parameters"]

    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": rendered_prompt["system_prompt"]},
            {"role": "user", "content": rendered_prompt["user_prompt"]},
        ],
        temperature=parameters.get("temperature", 0.1),
        max_tokens=parameters.get("max_tokens", 4000),
        response_format={
            "type": "json_schema",
            "json_schema": {"name": schema_name, "strict": True, "schema": schema},
        },
    )

    usage = getattr(response, "usage", None)
    if usage is not None:
        logger.info(f"Tokens used for {schema_name}: {usage.total_tokens}")

    content = response.choices[0].message.content
    if not content:
        raise ValueError(f"{model} returned an empty response for {schema_name}")

    return content
