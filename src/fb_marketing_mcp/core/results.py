# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Uniform result wrapper returned by every tool operation."""


from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ToolResult:
    success: bool
    message: str
    data: Optional[Any] = None

    def __post_init__(self) -> None:
        if not self.success and self.data is not None:
            raise ValueError("failed results cannot carry data")

    @classmethod
    def ok(cls, message: str, data: Optional[Any] = None) -> "ToolResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> "ToolResult":
        return cls(success=False, message=message or "Unknown error")
