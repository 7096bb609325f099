"""
Classification & Routing Module
===============================

Bounded context that turns a free-text issue description into ticket fields.

Responsibilities:
- Detect priority and category from keywords
- Decide whether class details must be captured
- Apply escalation rules for known issue subtypes
- Route categories to departments
- Calculate and evaluate SLA deadlines
"""
