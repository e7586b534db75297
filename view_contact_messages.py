#!/usr/bin/env python3
"""
Script to view contact form messages left by site visitors.
Shows who wrote, when, and whether the message has been read in the admin panel.
"""

from typing import List
from tabulate import tabulate

from portfolioflow.db.db import init_db
from portfolioflow.services.contact import list_contact_messages
from portfolioflow.services.errors import PersistenceError
from portfolioflow.utils.models import ContactMessage

HEADERS = ["Received", "Name", "Email", "Message", "Read"]


def message_rows(messages: List[ContactMessage], unread_only: bool = False,
                 limit: int = 50, width: int = 60) -> List[list]:
    rows = []
    for msg in messages:
        if unread_only and msg.is_read:
            continue
        text = msg.message.replace("\n", " ")
        # Keep the table readable in a terminal
        if len(text) > width:
            text = text[:width] + "..."
        rows.append([
            msg.created_at.strftime("%Y-%m-%d %H:%M"),
            msg.name,
            msg.email,
            text,
            "✓" if msg.is_read else "",
        ])
        if len(rows) >= limit:
            break
    return rows


def view_contact_messages(unread_only: bool = False, limit: int = 50):
    """Print the most recent contact messages as a table."""
    init_db()
    try:
        messages = list_contact_messages()
    except PersistenceError as e:
        print(f"❌ Error viewing contact messages: {e}")
        return

    rows = message_rows(messages, unread_only=unread_only, limit=limit)
    if not rows:
        print("📭 No unread messages" if unread_only else "📭 No messages found")
        return

    print(f"📊 Contact Messages{' (unread only)' if unread_only else ''}")
    print(f"📈 Showing {len(rows)} most recent messages")
    print()
    print(tabulate(rows, headers=HEADERS, tablefmt="grid"))

    print()
    print("📈 Inbox Statistics:")
    print(f"   Total messages: {len(messages)}")
    print(f"   Unread: {sum(1 for m in messages if not m.is_read)}")
    print(f"   Unique senders: {len({m.email for m in messages})}")


if __name__ == "__main__":
    import sys

    unread_only = "--unread" in sys.argv
    args = [a for a in sys.argv[1:] if a != "--unread"]
    limit = int(args[0]) if args else 50
    view_contact_messages(unread_only, limit)
