"""Builds the input and tool definitions for a Responses API chat request."""

import json
from typing import Any, Dict, List, Optional


class ChatConfig:
    """Translates app-level function definitions and results into API shapes.

    Args:
        functions: Tool definitions, each with name, description,
            params_schema and strict keys.
        function_results: Results of tool calls from the previous turn, each
            with call_id and output.
    """

    def __init__(
        self,
        functions: Optional[List[Dict[str, Any]]] = None,
        function_results: Optional[List[Dict[str, Any]]] = None,
    ):
        self.functions = functions or []
        self.function_results = function_results or []

    @property
    def tools(self) -> List[Dict[str, Any]]:
        return [
            {
                "type": "function",
                "name": fn["name"],
                "description": fn.get("description", ""),
                "parameters": fn.get("params_schema", {}),
                "strict": fn.get("strict", False),
            }
            for fn in self.functions
        ]

    def build_input(self, prompt: str) -> List[Dict[str, Any]]:
        """The user prompt followed by any function call outputs."""
        results = [
            {
                "type": "function_call_output",
                "call_id": result["call_id"],
                "output": json.dumps(result["output"], default=str),
            }
            for result in self.function_results
        ]

        return [{"role": "user", "content": prompt}, *results]
