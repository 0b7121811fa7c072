"""CLI output formatting for JSON and text modes."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from autowire.core.exceptions import AutowireError


class OutputFormatter:
    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(self, error: Exception, message: Optional[str] = None) -> None:
        """Report ``error`` on stderr."""
        msg = message or str(error)
        if self.json_mode:
            if isinstance(error, AutowireError):
                output = error.to_json_error()
            else:
                output = {"message": msg, "code": type(error).__name__, "context": {}}
            print(json.dumps({"status": "error", **output}, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)
            for issue in getattr(error, "issues", None) or []:
                print(f"  - {issue}", file=sys.stderr)


__all__ = ["OutputFormatter"]
