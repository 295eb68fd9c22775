"""
Core Business Logic
==================

Transport-independent request pipeline for the mermaid tool.

Modules:
- errors: Protocol error codes, tagged failures and the error mapper
- validation: Argument validation
- orchestrator: Backend invocation and response shaping
- rendering: mermaid.js rendering with browser automation
"""
