"""Built-in question banks for the detection quizzes."""

from __future__ import annotations

from .session import Question, Quiz

PHISHING_QUESTIONS = [
    Question(
        id=1,
        prompt=(
            "You receive an email from your bank asking you to click a link to verify your "
            "account. The email contains urgent language and a link that points to a slightly "
            "different domain. What are the most suspicious signs?"
        ),
        choices=(
            "The urgent language and unfamiliar link — possible phishing",
            "Banks always email for verification, so it's safe",
            "The email is legitimate because it uses your name",
            "Ignore — it's harmless promotional content",
        ),
        answer=0,
        explanation=(
            "Phishing emails often use urgent language to prompt immediate action and links that "
            "mimic real domains (typosquatting). Banks rarely ask for verification via email with "
            "direct links. Check sender address and hover the link to inspect the true URL."
        ),
    ),
    Question(
        id=2,
        prompt=(
            "An email contains an attachment named 'invoice.zip' from an unknown sender. "
            "What should you do?"
        ),
        choices=(
            "Open it to see the invoice",
            "Scan the file and verify sender before opening",
            "Reply asking to resend because it might be important",
            "Forward to colleagues immediately",
        ),
        answer=1,
        explanation=(
            "Attachments (especially .zip, .exe, documents with macros) from unknown senders are "
            "high-risk. Scan with antivirus and verify the sender separately (call them) before "
            "opening."
        ),
    ),
    Question(
        id=3,
        prompt=(
            "An email address looks like support@amaz0n.com (zero instead of o). The email content "
            "looks like a purchase receipt you don't recognize. This suggests:"
        ),
        choices=(
            "A legitimate receipt from Amazon",
            "A phishing attempt using a lookalike domain",
            "An internal system notification",
            "A harmless newsletter",
        ),
        answer=1,
        explanation=(
            "Attackers use visually similar characters to impersonate brands (e.g., 'amaz0n' "
            "instead of 'amazon'). Check the exact sender domain and don't click links; open your "
            "account directly through the official site if concerned."
        ),
    ),
]

WEBSITE_QUESTIONS = [
    Question(
        id=1,
        prompt=(
            "You visit a site that has a padlock icon but the URL is "
            "'httpS://secure-login.example.verify-now.com'. Is this definitely the real site?"
        ),
        choices=(
            "Yes — padlock means it's secure and real",
            "No — padlock only means the connection is encrypted; domain matters",
            "Yes — any site with https is safe",
            "No — it's definitely a virus",
        ),
        answer=1,
        explanation=(
            "HTTPS (padlock) means the connection is encrypted, not that the site is trustworthy. "
            "Attackers can host phishing pages on HTTPS. Carefully check the domain "
            "(example.verify-now.com) — the real site would likely be example.com or "
            "login.example.com."
        ),
    ),
    Question(
        id=2,
        prompt=(
            "Which of these is the best way to verify a website's authenticity before entering "
            "credentials?"
        ),
        choices=(
            "Trust the look of the page and logo",
            "Check the exact domain name and use bookmarks or type the known URL",
            "Click the first linked result in search engines",
            "Use the browser's autofill without checking",
        ),
        answer=1,
        explanation=(
            "Always verify the exact domain name. Use bookmarks or type the URL you know, or search "
            "for the official site through trusted sources. Avoid entering credentials on pages "
            "reached through unsolicited links."
        ),
    ),
]

EMAIL_QUESTIONS = [
    Question(
        id=1,
        prompt=(
            "An email from a colleague asks for a confidential file but contains unusual grammar "
            "and a slightly off sender address. What should you do?"
        ),
        choices=(
            "Send the file immediately — they asked",
            "Verify via a different channel (call or chat) before sending",
            "Ignore the message",
            "Reply with your confidential file to prove identity",
        ),
        answer=1,
        explanation=(
            "Business Email Compromise (BEC) often spoofs internal addresses or uses lookalikes "
            "and tries to rush requests. Verify via another channel before sharing sensitive data."
        ),
    ),
    Question(
        id=2,
        prompt=(
            "An email claims your mailbox is full and asks you to click a link to upgrade storage. "
            "The link points to a short URL (bit.ly/xyz). Best response:"
        ),
        choices=(
            "Click the link and upgrade — it resolves the issue",
            "Don't click — check storage settings directly from your email provider",
            "Forward to IT without checking",
            "Reply to the email asking for more info",
        ),
        answer=1,
        explanation=(
            "Shortened URLs hide destination domains. Check your account directly via the official "
            "provider website or contact IT. Avoid clicking links that claim account problems."
        ),
    ),
]

URL_QUESTIONS = [
    Question(
        id=1,
        prompt="Which URL is most likely malicious or a typosquat?",
        choices=(
            "https://accounts.google.com",
            "https://goog1e.com",
            "https://google.com/login",
            "https://mail.google.com",
        ),
        answer=1,
        explanation=(
            "'goog1e.com' replaces 'l' with '1' and is a typical typosquatting domain. Always "
            "inspect the domain name carefully (the right-most registered domain is important)."
        ),
    ),
    Question(
        id=2,
        prompt=(
            "You see a long URL with many subdomains: "
            "'https://secure.paypal.accounts.verify.example.com'. What is the effective registered "
            "domain?"
        ),
        choices=(
            "secure.paypal.accounts.verify.example.com",
            "paypal.accounts.verify.example.com",
            "example.com",
            "verify.example.com",
        ),
        answer=2,
        explanation=(
            "The effective registered domain (the root) is 'example.com'. Subdomains can be "
            "arbitrarily named to impersonate services. Always pay attention to the registered "
            "domain (the last two labels typically)."
        ),
    ),
]

DEFAULT_TAB = "phish"

BUILTIN_QUIZZES: dict[str, Quiz] = {
    "phish": Quiz("phish", "Detect Phishing Emails", PHISHING_QUESTIONS, "Phishing"),
    "website": Quiz("website", "Identify Fake vs Real Websites", WEBSITE_QUESTIONS, "Websites"),
    "email": Quiz("email", "Spot Fake or Compromised Emails", EMAIL_QUESTIONS, "Emails"),
    "url": Quiz("url", "Detect Malicious or Typosquatted URLs", URL_QUESTIONS, "URLs"),
}
