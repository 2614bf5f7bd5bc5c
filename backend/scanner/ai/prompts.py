from __future__ import annotations

from dataclasses import replace

from scanner.ai.types import WebsiteContent

TEXT_PREFIX_LIMIT = 2000
LINK_LIMIT = 20

RESPONSE_FORMAT_INSTRUCTIONS = """Please provide:
1. A security risk assessment (SAFE, LOW, MEDIUM, HIGH, or CRITICAL)
2. Specific reasons for your assessment (list at least 3 points with details)
3. A confidence score between 0 and 1 indicating how certain you are

Format your response as JSON with the following structure:
{
  "risk": "LOW",
  "reasons": ["Reason 1", "Reason 2", "Reason 3"],
  "confidenceScore": 0.8
}"""

SECURITY_CHECKS = """Perform a comprehensive security analysis with these specific checks:

1. REPUTATION CHECK: Based on your knowledge, determine whether this site has been reported for scams,
fraud or malicious activity, or appears on known blocklists.

2. BRAND IMPERSONATION: If the site claims to represent a known company (Apple, Microsoft, Amazon, banks, etc.),
verify that the domain is legitimate. Look for:
   - Slight misspellings (e.g. "arnazon.com" instead of "amazon.com")
   - Domain variations (e.g. "microsoft-support.com" instead of "microsoft.com")
   - Unusual TLDs (e.g. ".xyz", ".online" instead of the expected ".com", ".org")

3. LINK CONSISTENCY: Examine the links (especially About, Contact and Legal pages). Check whether they:
   - Use the same domain as the main site
   - Point to unexpected domains
   - Mix HTTP and HTTPS suspiciously

4. CONTENT ANALYSIS: Look for:
   - Urgency or pressure tactics
   - Unrealistic rewards, prizes or returns
   - Poor grammar or inconsistent language quality
   - Requests for personal or financial information
   - Limited or suspicious contact information

5. TECHNICAL INDICATORS: Consider:
   - Mismatched or missing SSL certificates
   - Newly registered domains
   - Unusual redirect chains
   - URL shorteners used for critical links"""

SYSTEM_MESSAGE = (
    'You are a security expert analyzing websites for threats, scams, and phishing attempts. '
    'Respond only with JSON.'
)


def truncate_content(content: WebsiteContent) -> WebsiteContent:
    """Bound the page content sent to a provider.

    Only the first ``TEXT_PREFIX_LIMIT`` characters of the text and the first
    ``LINK_LIMIT`` links are kept, so analysis quality is bounded by this prefix.
    """
    return replace(
        content,
        text=content.text[:TEXT_PREFIX_LIMIT],
        links=tuple(content.links[:LINK_LIMIT]),
    )


def _describe_page(content: WebsiteContent) -> str:
    bounded = truncate_content(content)
    return (
        'Analyze this website for security threats, scams, or phishing attempts.\n'
        f'URL: {bounded.url}\n'
        f'Title: {bounded.title}\n'
        f'Content: {bounded.text}...\n'
        f'Links: {", ".join(bounded.links)}'
    )


def build_generate_content_prompt(content: WebsiteContent) -> str:
    return f'{_describe_page(content)}\n\n{SECURITY_CHECKS}\n\n{RESPONSE_FORMAT_INSTRUCTIONS}'


def build_chat_messages(content: WebsiteContent) -> list[dict[str, str]]:
    return [
        {'role': 'system', 'content': SYSTEM_MESSAGE},
        {'role': 'user', 'content': f'{_describe_page(content)}\n\n{RESPONSE_FORMAT_INSTRUCTIONS}'},
    ]
