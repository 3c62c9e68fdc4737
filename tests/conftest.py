import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers that setup_logging attached during a test."""
    yield
    logging.getLogger("lessonblocks").handlers.clear()


@pytest.fixture
def lesson_document():
    """A lesson with prose, every content-block fence, and ordinary code."""
    return (
        "# Deploying the service\n"
        "\n"
        "Start by building the image.\n"
        "\n"
        "```terminal\n"
        "$ docker build \\\n"
        "  -t api:latest .\n"
        "Successfully built 3f2a\n"
        "```\n"
        "\n"
        "```email\n"
        "@warning\n"
        "From: ops@example.com\n"
        "Subject: Deploy window\n"
        "\n"
        "Deploys freeze at 17:00.\n"
        "```\n"
        "\n"
        "```checklist\n"
        "✓ Image builds locally\n"
        "✓ Tests pass\n"
        "```\n"
        "\n"
        "```python\n"
        "print('not a content block')\n"
        "```\n"
        "\n"
        "```pager\n"
        "@critical | 03:12 UTC | PagerDuty\n"
        "API error rate above 5%\n"
        "Rollback started\n"
        "```\n"
    )
