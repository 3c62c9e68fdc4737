import pytest


@pytest.fixture
def session_transcript():
    """A terminal session mixing commands, continuations, comments and output."""
    return (
        "# install dependencies\n"
        "$ pip install \\\n"
        "    requests \\\n"
        "    pyyaml\n"
        "Successfully installed requests pyyaml\n"
        "\n"
        "> exit"
    )


@pytest.fixture
def incident_email():
    return (
        "From: oncall@example.com\n"
        "To: team@example.com\n"
        "Subject: Incident 4521 resolved\n"
        "Date: Mon, 3 Jun 2024 09:14\n"
        "---\n"
        "The database failover completed.\n"
        "\n"
        "Postmortem on Thursday."
    )


@pytest.fixture
def adversarial_inputs():
    """Strings every parser must accept without raising."""
    return [
        "",
        " ",
        "\n\n\n",
        "\t \r\n ",
        "single line",
        "\\",
        "$",
        ">",
        "#",
        "---",
        "From:",
        "From: ",
        "✓",
        "- ",
        "$ a \\\n\\\n\\",
        "\x00\x1b[31m",
        "ünïcødé ✗ × ❌",
        "a\r\nb\rc\n",
        ":::sidebyside\n:::",
    ]
