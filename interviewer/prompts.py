"""Prompt text for the interviewer generators."""
from __future__ import annotations

from textwrap import dedent
from typing import TYPE_CHECKING, List, Optional, Sequence

from catalog.models import Course, Topic
from difficulty import DifficultyContext, DifficultyTracker

if TYPE_CHECKING:
    from interview_session.models import PersonaSnapshot, RoleSnapshot, TranscriptMessage

LEVEL_DESCRIPTIONS = {
    1: "Entry-level focusing on fundamentals and learning ability",
    2: "Mid-level with solid skills and growing independence",
    3: "Senior-level with deep expertise and mentoring ability",
    4: "Lead-level with technical leadership and strategic thinking",
}

LEVEL_GUIDANCE = {
    1: "Keep questions at a foundational level. Focus on basic concepts, simple use cases and guided problem-solving. Provide hints when needed.",
    2: "Ask moderately challenging questions. Expect understanding of core concepts and some ability to apply them independently.",
    3: "Ask advanced questions requiring deep understanding. Explore edge cases, architectural decisions and trade-offs.",
    4: "Ask expert-level questions. Focus on system design, leadership scenarios, complex trade-offs and strategic thinking.",
}

MAX_SUBTOPICS = 10


def _percent(weight: Optional[float], default: float) -> int:
    return round((weight if weight is not None else default) * 100)


def persona_block(persona: Optional["PersonaSnapshot"]) -> str:
    if persona is None:
        return "You are a friendly but thorough technical interviewer."
    weights = persona.evaluation_weight
    focus = ", ".join(persona.focus_areas) or "general technical knowledge"
    lines = [
        f"You are acting as a {persona.name} interviewer.",
        "",
        f"Your interview style: {persona.description or persona.style or 'professional'}",
        f"Focus areas: {focus}",
        "",
        "Evaluation emphasis:",
        f"- Technical accuracy: {_percent(weights.get('technical'), 0.5)}%",
        f"- Communication: {_percent(weights.get('communication'), 0.25)}%",
        f"- Problem solving: {_percent(weights.get('problemSolving', weights.get('problem_solving')), 0.25)}%",
    ]
    return "\n".join(lines)


def role_block(role: Optional["RoleSnapshot"]) -> str:
    if role is None:
        return ""
    suffix = " (Specialized Role)" if role.type == "course-specific" else ""
    experience = role.years_experience or LEVEL_DESCRIPTIONS.get(role.level, LEVEL_DESCRIPTIONS[2])
    lines = [f"Target Role: {role.name}{suffix}", f"Experience Level: {experience}"]
    if role.expectations:
        exp = role.expectations
        lines += [
            "Expected Profile:",
            f"- Technical depth: {exp.get('technicalDepth', exp.get('technical_depth', 'solid'))}",
            f"- Independence: {exp.get('independence', 'semi-independent')}",
            f"- Complexity handling: {exp.get('complexity', 'moderate')}",
        ]
    if role.evaluation_criteria:
        lines.append("Evaluation criteria:")
        lines += [f"- {item}" for item in role.evaluation_criteria]
    if role.focus_topics:
        lines.append(f"Key focus areas for this role: {', '.join(role.focus_topics)}")
    return "\n".join(lines)


def difficulty_block(context: Optional[DifficultyContext]) -> str:
    if context is None:
        return ""
    lines = [
        f"Current Difficulty Level: {context.current_level}/4 ({context.level_name})",
        LEVEL_GUIDANCE.get(context.current_level, LEVEL_GUIDANCE[2]),
    ]
    if context.recent_assessments:
        recent = ", ".join(item.value for item in context.recent_assessments)
        lines += ["", f"Recent response quality: {recent}"]
    lines += [
        "",
        "Adaptation rules:",
        "- If candidate is struggling (brief/partial answers), simplify questions or offer hints",
        "- If candidate is excelling (excellent answers), increase depth or complexity",
        "- Stay encouraging regardless of difficulty adjustments",
    ]
    return "\n".join(lines)


def transcript_text(transcript: Sequence["TranscriptMessage"]) -> str:
    return "\n\n".join(
        f"{'Interviewer' if msg.role == 'interviewer' else 'Candidate'}: {msg.content}" for msg in transcript
    )


def _header(*blocks: str) -> str:
    return "\n\n".join(block for block in blocks if block)


def opening_prompt(
    course: Course,
    topics: Sequence[Topic],
    persona: Optional["PersonaSnapshot"],
    role: Optional["RoleSnapshot"],
    difficulty: DifficultyContext,
) -> str:
    topic_names = ", ".join(topic.name for topic in topics)
    subtopics: List[str] = [sub for topic in topics for sub in topic.subtopics][:MAX_SUBTOPICS]
    style = f" that reflects your {persona.style} style" if persona and persona.style else ""
    body = dedent(
        f"""\
        You are conducting an interview about {course.name}.

        The interview will cover these topics: {topic_names}
        Specific areas: {', '.join(subtopics) or 'any'}

        Start the interview with:
        1. A brief, friendly greeting{style}
        2. Ask your first question about one of the topics

        Return ONLY a valid JSON object in this exact format:
        {{"message": "Your greeting and first question", "currentTopic": "The topic name you're asking about"}}

        Guidelines:
        - Start with a question appropriate for the target difficulty level
        - Focus on understanding and application, not just recall
        - Keep the question clear and specific"""
    )
    return _header(persona_block(persona), role_block(role), difficulty_block(difficulty), body)


def turn_prompt(
    course: Course,
    topics: Sequence[Topic],
    transcript: Sequence["TranscriptMessage"],
    user_message: str,
    persona: Optional["PersonaSnapshot"],
    role: Optional["RoleSnapshot"],
    difficulty: DifficultyContext,
) -> str:
    topic_names = ", ".join(topic.name for topic in topics)
    history = transcript_text(transcript)
    body = dedent(
        """\
        You are continuing an interview about {course}.
        Topics being covered: {topics}

        Conversation so far:
        {history}

        Candidate's latest response: {answer}

        Do ONE of the following:
        1. If the answer was incomplete or needs clarification, ask a probing follow-up question
        2. If the answer was good, give brief positive feedback and ask about a different aspect or topic
        3. If the answer showed a misconception, gently correct it and ask a related question

        Return ONLY a valid JSON object in this exact format:
        {{"message": "Feedback and your next question", "currentTopic": "The topic name you're asking about", "assessmentOfLastAnswer": "brief|partial|good|excellent", "isProbing": true}}

        Assessment guide:
        - "brief": too short, missing key points, or showed lack of understanding
        - "partial": covered some aspects but missed important details
        - "good": solid, covered main points correctly
        - "excellent": comprehensive, deep understanding, good examples"""
    ).format(course=course.name, topics=topic_names, history=history, answer=user_message)
    return _header(persona_block(persona), role_block(role), difficulty_block(difficulty), body)


def summary_prompt(
    course: Course,
    topics: Sequence[Topic],
    transcript: Sequence["TranscriptMessage"],
    persona: Optional["PersonaSnapshot"],
    role: Optional["RoleSnapshot"],
    tracker: DifficultyTracker,
) -> str:
    history = transcript_text(transcript)
    started = tracker.adjustment_history[0].from_level if tracker.adjustment_history else tracker.current_level
    adjustments = len(tracker.adjustment_history)
    progression = [
        "Difficulty Progression:",
        f"- Started at level: {started}/4",
        f"- Ended at level: {tracker.current_level}/4",
        f"- Adjustments made: {adjustments}" if adjustments else "- No difficulty adjustments needed",
    ]
    role_fit = "" if role is None else "\n- roleFitScore: 0-100 based on fit for the target role"
    body = dedent(
        """\
        You are a technical interviewer who just completed an interview about {course}.
        Topics: {topics}

        Full interview transcript:
        {history}

        Analyze the candidate's performance and provide a comprehensive summary.

        Return ONLY a valid JSON object with the keys: score, overallFeedback, topicsCovered, strengths,
        areasToImprove, recommendedNextSteps, roleFitScore, roleFitFeedback, difficultyProgression.

        Guidelines:
        - score: 0-100 based on demonstrated knowledge{role_fit}
        - Be constructive and specific in feedback
        - Give actionable next steps"""
    ).format(
        course=course.name,
        topics=", ".join(topic.name for topic in topics),
        history=history,
        role_fit=role_fit,
    )
    return _header(role_block(role), persona_block(persona), "\n".join(progression), body)


__all__ = ["difficulty_block", "opening_prompt", "persona_block", "role_block", "summary_prompt", "turn_prompt"]
