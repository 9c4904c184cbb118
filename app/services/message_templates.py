# app/services/message_templates.py
"""
Simulated SMS bodies for each workflow step.
Values are interpolated as-is (no escaping). A referenced value that is
missing renders as "N/A"; an unknown kind gets FALLBACK_MESSAGE.
"""

FALLBACK_MESSAGE = "System notification"
MISSING_VALUE = "N/A"

TEMPLATES = {
    "check_in": (
        "Welcome to DCS! You have been successfully checked in at the Gatehouse. "
        "Your mobile number: {phone}. Please keep your phone nearby - we will contact you "
        "when it's time to proceed. Reference: {po}. Estimated wait: {quoted} minutes. "
        "Thank you for your patience."
    ),
    "notified": (
        "ACTION REQUIRED - Please proceed immediately to the loading area. "
        "Bay Assignment: TBC on arrival. Ensure your paperwork is ready and follow "
        "instructions from Goods-Out staff. Reference: {po}. Thank you."
    ),
    "released": (
        "Loading Complete - You may now proceed to the gatehouse exit. "
        "Please ensure you have all documentation before leaving. "
        "Reference: {po}. Total time on site: {duration}. Safe travels!"
    ),
}


class _TemplateData(dict):
    def __missing__(self, key):
        return MISSING_VALUE


def generate_message_content(kind: str, data: dict) -> str:
    template = TEMPLATES.get(kind)
    if template is None:
        return FALLBACK_MESSAGE
    values = _TemplateData({k: v for k, v in data.items() if v is not None})
    return template.format_map(values)
