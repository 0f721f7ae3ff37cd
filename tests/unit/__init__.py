"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation, endpoint selection, topics
    - config: Environment loading and validation
    - ui/composer: Draft, attachment and dictation state
    - chat/attachments: Preview handle bookkeeping
"""
