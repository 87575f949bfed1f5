"""
langgraph_essentials.workflows.samples

Sample inputs used by the CLI demos and the tests.
"""

from __future__ import annotations

from langgraph_essentials.workflows.state import EmailState

SAMPLE_EMAILS: tuple[EmailState, ...] = (
    {
        "email_id": "email-001",
        "sender": "dana@customer.example",
        "subject": "URGENT: checkout is down",
        "body": "Our checkout page has been returning errors for 20 minutes. Please fix ASAP.",
    },
    {
        "email_id": "email-002",
        "sender": "sam@prospect.example",
        "subject": "Pricing for teams",
        "body": "How much does the team plan cost for 25 seats?",
    },
    {
        "email_id": "email-003",
        "sender": "promo@lottery.example",
        "subject": "You are our lucky winner",
        "body": "Congratulations! You won a prize. Click here to claim your reward.",
    },
    {
        "email_id": "email-004",
        "sender": "lee@partner.example",
        "subject": "Thanks for the workshop",
        "body": "The workshop last week was great. Looking forward to the next one.",
    },
)

SAMPLE_DOCUMENTS: tuple[dict[str, str], ...] = (
    {
        "doc_id": "doc-1",
        "text": "LangGraph makes it easy to build stateful agents. The graph model is clear "
        "and the checkpointing support is excellent.",
    },
    {
        "doc_id": "doc-2",
        "text": "The release was delayed because of a bad migration. Users reported slow "
        "pages and broken exports.",
    },
    {
        "doc_id": "doc-3",
        "text": "Parallel branches run in the same superstep and their updates are merged by "
        "reducers before the next step starts.",
    },
)

SAMPLE_CONVERSATIONS: dict[str, tuple[str, ...]] = {
    "alice": (
        "Hi! My name is Alice.",
        "I live in Lisbon and I like hiking.",
        "What do you remember about me?",
    ),
    "bob": (
        "Hello, my name is Bob.",
        "What do you remember about me?",
    ),
}
