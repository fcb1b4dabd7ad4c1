"""
Built-in email templates.

Used when no active EmailTemplate row exists for a type, and as the seed data
for the ``create_email_templates`` command.
"""

DEFAULT_TEMPLATES = {
    'DECISION_ACCEPTED': {
        'name': 'Manuscript Accepted',
        'subject': 'Manuscript Accepted - {{ submission_title }}',
        'html_body': (
            '<p>Dear {{ author_name }},</p>'
            '<p>We are pleased to inform you that your manuscript '
            '<strong>{{ submission_title }}</strong> has been accepted for publication in '
            '{{ journal_title }}.</p>'
            '{% if notes %}<p>Editor notes:</p><blockquote>{{ notes }}</blockquote>{% endif %}'
            '<p><a href="{{ submission_url }}">View your submission</a></p>'
        ),
    },
    'DECISION_REJECTED': {
        'name': 'Manuscript Rejected',
        'subject': 'Decision on Your Manuscript - {{ submission_title }}',
        'html_body': (
            '<p>Dear {{ author_name }},</p>'
            '<p>After careful consideration, {{ journal_title }} is unable to accept your manuscript '
            '<strong>{{ submission_title }}</strong>.</p>'
            '{% if notes %}<p>Editor notes:</p><blockquote>{{ notes }}</blockquote>{% endif %}'
            '<p><a href="{{ submission_url }}">View your submission</a></p>'
        ),
    },
    'DECISION_REVISION_REQUIRED': {
        'name': 'Revision Required',
        'subject': 'Revisions Required - {{ submission_title }}',
        'html_body': (
            '<p>Dear {{ author_name }},</p>'
            '<p>The editors of {{ journal_title }} have requested revisions to your manuscript '
            '<strong>{{ submission_title }}</strong>.</p>'
            '{% if notes %}<p>Editor notes:</p><blockquote>{{ notes }}</blockquote>{% endif %}'
            '<p><a href="{{ submission_url }}">View your submission</a></p>'
        ),
    },
}
