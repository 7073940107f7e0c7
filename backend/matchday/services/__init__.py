"""
Services Layer

Pure business logic services that:
- Accept domain inputs (session plus explicit actor/entity ids)
- Return domain outputs (models, result objects)
- Raise typed errors from matchday.errors on rule violations
- Do NOT depend on HTTP request/response objects
"""
