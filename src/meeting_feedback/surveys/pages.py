"""
HTML pages for the public survey.
"""

from datetime import datetime

from meeting_feedback.shared.templating import html_template
from meeting_feedback.surveys.models import RATING_MAX, RATING_MIN

# (field, heading, statement)
RATING_QUESTIONS: tuple[tuple[str, str, str], ...] = (
    (
        "punctuality",
        "Punctuality",
        "The salesperson joined the meeting on time and respected the agreed schedule.",
    ),
    (
        "listening_understanding",
        "Listening &amp; Understanding",
        "I felt listened to and that my needs or concerns were clearly understood.",
    ),
    (
        "knowledge_expertise",
        "Knowledge &amp; Expertise",
        "The salesperson demonstrated strong knowledge of the product, service, and our business context.",
    ),
    (
        "clarity_answers",
        "Clarity of Answers",
        "My questions were answered clearly and completely during the meeting.",
    ),
    (
        "overall_value",
        "Overall Value of the Meeting",
        "The meeting was productive and provided value to me and my organization.",
    ),
)

STYLES = """
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif;
      line-height: 1.6;
      color: #333;
      background-color: #f5f5f5;
      padding: 20px;
    }
    .container {
      max-width: 700px;
      margin: 0 auto;
      background-color: #ffffff;
      border-radius: 8px;
      padding: 40px;
      box-shadow: 0 2px 4px rgba(0,0,0,0.1);
    }
    h1 { color: #2563eb; font-size: 28px; margin-bottom: 20px; }
    h2 { color: #1e40af; font-size: 22px; margin-top: 30px; margin-bottom: 20px; }
    h3 { color: #1e293b; font-size: 18px; margin-bottom: 8px; }
    .intro { color: #666; margin-bottom: 25px; font-size: 15px; }
    .meeting-info {
      background-color: #f0f9ff;
      padding: 15px;
      border-radius: 6px;
      margin: 20px 0;
      border-left: 4px solid #2563eb;
    }
    .instructions {
      background-color: #fef3c7;
      padding: 15px;
      border-radius: 6px;
      margin: 20px 0;
      border-left: 4px solid #f59e0b;
      font-size: 14px;
    }
    .question-block { margin: 30px 0; padding: 20px 0; border-bottom: 1px solid #e5e7eb; }
    .question-text { color: #4b5563; margin-bottom: 15px; font-size: 14px; }
    .rating-group { display: flex; gap: 10px; flex-wrap: wrap; }
    .rating-button { position: relative; cursor: pointer; }
    .rating-button input[type="radio"] { position: absolute; opacity: 0; }
    .rating-label {
      display: inline-block;
      width: 50px;
      height: 50px;
      line-height: 50px;
      text-align: center;
      border: 2px solid #d1d5db;
      border-radius: 8px;
      background-color: #fff;
      transition: all 0.2s;
      font-weight: 600;
      color: #6b7280;
    }
    .rating-button input[type="radio"]:checked + .rating-label {
      background-color: #2563eb;
      color: white;
      border-color: #2563eb;
    }
    .rating-button:hover .rating-label { border-color: #2563eb; transform: scale(1.05); }
    label { display: block; font-weight: 600; margin-bottom: 8px; color: #1e293b; }
    textarea {
      width: 100%;
      padding: 12px;
      border: 2px solid #d1d5db;
      border-radius: 6px;
      font-family: inherit;
      font-size: 14px;
      resize: vertical;
    }
    textarea:focus { outline: none; border-color: #2563eb; }
    .submit-button {
      background-color: #2563eb;
      color: white;
      padding: 14px 32px;
      border: none;
      border-radius: 6px;
      font-size: 16px;
      font-weight: 600;
      cursor: pointer;
      margin-top: 30px;
    }
    .submit-button:hover { background-color: #1e40af; }
    .date { color: #6b7280; font-size: 14px; margin-top: 10px; }
    @media (max-width: 600px) {
      .container { padding: 20px; }
      h1 { font-size: 24px; }
      .rating-label { width: 45px; height: 45px; line-height: 45px; }
    }
"""

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>__TITLE__</title>
  <style>__STYLES__</style>
</head>
<body>
  <div class="container">
__BODY__
  </div>
__SCRIPT__
</body>
</html>
"""


def _page(title: str, body: str, script: str = "") -> str:
    return (
        _PAGE.replace("__TITLE__", title)
        .replace("__STYLES__", STYLES)
        .replace("__BODY__", body)
        .replace("__SCRIPT__", script)
    )


def _rating_buttons(name: str) -> str:
    return "".join(
        f'\n          <label class="rating-button">'
        f'<input type="radio" name="{name}" value="{value}" required>'
        f'<span class="rating-label">{value}</span></label>'
        for value in range(RATING_MIN, RATING_MAX + 1)
    )


def _question_blocks() -> str:
    return "".join(
        f"""
      <div class="question-block">
        <h3>{heading}</h3>
        <p class="question-text">{statement}</p>
        <div class="rating-group">{_rating_buttons(name)}
        </div>
      </div>"""
        for name, heading, statement in RATING_QUESTIONS
    )


_SUBMIT_SCRIPT = """  <script>
    const form = document.getElementById('surveyForm');
    const requiredFields = ['punctuality', 'listening_understanding', 'knowledge_expertise', 'clarity_answers', 'overall_value'];
    form.addEventListener('submit', async (e) => {
      e.preventDefault();
      const missingFields = requiredFields.filter(field => !form.elements[field].value);
      if (missingFields.length > 0) {
        alert('Please answer all rating questions (1-5) before submitting.');
        return;
      }
      const data = Object.fromEntries(new FormData(form));
      try {
        const response = await fetch(form.getAttribute('action'), {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(data),
        });
        if (response.ok) {
          document.body.innerHTML = await response.text();
        } else {
          const error = await response.json();
          alert('Error: ' + error.error);
        }
      } catch (error) {
        alert('Failed to submit survey. Please try again.');
      }
    });
  </script>"""

SURVEY_FORM = html_template(_page(
    "Customer Meeting Feedback Survey",
    """    <h1>Customer Meeting Feedback Survey</h1>
    <p class="intro">
      Hi {{participant_name}},<br><br>
      Thank you for taking a moment to share your feedback about your recent meeting with our team.
      Your input helps us improve and make every interaction more valuable.
    </p>
    <div class="meeting-info"><strong>Meeting:</strong> {{meeting_title}}</div>
    <p class="instructions">
      Please rate each statement from <strong>1 to 5</strong>, where:<br>
      <strong>1</strong> = Strongly disagree and <strong>5</strong> = Strongly agree
    </p>
    <form id="surveyForm" method="POST" action="/api/survey/{{token}}">"""
    + _question_blocks()
    + """
      <h2 style="margin-top: 40px;">Open Questions</h2>
      <div class="question-block">
        <label for="most_valuable">What did you find most valuable about the meeting?</label>
        <textarea id="most_valuable" name="most_valuable" rows="4" placeholder="Share your thoughts..."></textarea>
      </div>
      <div class="question-block">
        <label for="improvements">What could we improve for future meetings?</label>
        <textarea id="improvements" name="improvements" rows="4" placeholder="Your suggestions..."></textarea>
      </div>
      <button type="submit" class="submit-button">Submit Feedback</button>
    </form>""",
    _SUBMIT_SCRIPT,
))

COMPLETED = html_template(_page(
    "Survey Already Completed",
    """    <h1>&#10003; Survey Already Completed</h1>
    <p>Thank you! You've already submitted your feedback for this meeting.</p>
    <p class="date">Submitted on: {{completed_at}}</p>""",
))

THANK_YOU_PAGE = _page(
    "Thank You!",
    """    <h1 style="color: #16a34a;">&#10003; Thank You!</h1>
    <p style="font-size: 18px; margin: 20px 0;">Your feedback has been submitted successfully.</p>
    <p>We appreciate you taking the time to help us improve our service.</p>""",
)

NOT_FOUND_PAGE = _page(
    "Survey not found",
    """    <h1>Survey not found</h1>
    <p>This survey link is invalid or has expired.</p>""",
)

ERROR_PAGE = _page(
    "Error",
    """    <h1>Error</h1>
    <p>Failed to load survey. Please try again later.</p>""",
)


def render_survey_form(token: str, participant_name: str | None, meeting_title: str) -> str:
    return SURVEY_FORM.render(
        {
            "token": token,
            "participant_name": participant_name or "there",
            "meeting_title": meeting_title,
        },
    )


def render_completed(completed_at: datetime) -> str:
    return COMPLETED.render(
        {"completed_at": completed_at.strftime("%Y-%m-%d %H:%M UTC")},
    )
