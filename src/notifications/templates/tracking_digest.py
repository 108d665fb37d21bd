"""Tracking digest templates: one row per buffered tracking update.

Rows are rendered exactly as captured; nothing is looked up at render time.
"""

from notifications.notification.event import NotificationType
from notifications.templates._formatting import format_timestamp, humanize


def _row_lines(row: dict) -> list[str]:
    lines = [
        f"- Shipment {row.get('shipment_id', 'N/A')} "
        f"(tracking {row.get('carrier_tracking_number') or 'N/A'})",
        f"  To: {row.get('receiver_name') or 'N/A'}, {row.get('destination') or 'N/A'}",
        f"  Status: {humanize(row.get('status'))} - {row.get('status_description') or ''}".rstrip(" -"),
    ]
    if row.get("issue_type"):
        lines.append(f"  Issue: {humanize(row['issue_type'])}")
    lines.append(f"  At: {format_timestamp(row.get('created_at'))}")
    return lines


class TrackingDigestTemplate:
    notification_type = NotificationType.TRACKING_DIGEST.value

    @staticmethod
    def render(context: dict) -> dict:
        rows = context.get("rows", [])
        name = context.get("owner_name") or "there"
        lines = [f"Hi {name},", "", f"Here are the latest updates for {len(rows)} of your shipments:", ""]
        for row in rows:
            lines.extend(_row_lines(row))
        return {
            "subject": f"Shipment Tracking Digest - {len(rows)} update(s)",
            "body": "\n".join(lines),
        }


class AdminTrackingDigestTemplate:
    notification_type = NotificationType.ADMIN_TRACKING_DIGEST.value

    @staticmethod
    def render(context: dict) -> dict:
        rows = context.get("rows", [])
        owners = {row.get("owner_id") for row in rows}
        lines = [f"{len(rows)} tracking update(s) across {len(owners)} account(s).", ""]
        for row in rows:
            lines.append(f"Account: {row.get('owner_name') or 'N/A'} <{row.get('owner_email') or 'N/A'}>")
            lines.extend(_row_lines(row))
        return {
            "subject": f"[Tracking Report] {len(rows)} update(s)",
            "body": "\n".join(lines),
        }
