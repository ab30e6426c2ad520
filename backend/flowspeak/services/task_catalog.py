"""Static task content: curriculum blocks, the practice library and the catalog index.

The curriculum is assembled from per-month "blocks" (breath reset, technique
drill, structured speaking, stuttering modification, optional CBT check-in,
micro-challenge, log). The practice library holds standalone tasks that the
adaptive selector and swap search draw from in addition to the curriculum
instances.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from flowspeak.api.schemas.program import DIFFICULTY_ORDER, Task, TaskDifficulty, TaskSetting, TaskType


def quarter_for_day(day: int) -> int:
    """Return the curriculum quarter (1-4) a day belongs to."""
    if day <= 90:
        return 1
    if day <= 180:
        return 2
    if day <= 270:
        return 3
    return 4


DIFFICULTY_BY_MONTH: Dict[int, TaskDifficulty] = {
    1: "beginner",
    2: "easy",
    3: "easy",
    4: "medium",
    5: "medium",
    6: "medium",
    7: "hard",
    8: "hard",
    9: "hard",
    10: "expert",
    11: "expert",
    12: "expert",
}

SETTING_BY_MONTH: Dict[int, TaskSetting] = {
    month: ("trusted_person" if month <= 2 else "public") for month in range(1, 13)
}

MICRO_CHALLENGE_BASE = [
    "Pick one real-life micro-challenge for today and do it intentionally.",
    "Use your tools (slow rate, pausing, onsets/contacts) and allow stutters without hiding.",
]

MICRO_CHALLENGE_OPTIONS: Dict[int, List[str]] = {
    1: [
        "Say hello + one sentence to a shop assistant.",
        "Ask a simple question like 'What time do you close?'",
        "Make one short call to friend/family (week 3-4).",
    ],
    2: [
        "One planned interaction using slow rate + pausing.",
        "Order something in person while allowing pauses.",
    ],
    3: [
        "Two short phone calls this week; do one today if pending.",
        "Deliberately stutter mildly on one word in a safe setting.",
    ],
    4: [
        "Make a scripted medium-stakes call (doctor/restaurant).",
        "Read your script once, then call using tools.",
    ],
    5: [
        "Use a pull-out in a live 5-10 min conversation.",
        "Do one voluntary stutter in public today.",
    ],
    6: [
        "Deliver a 5-10 min mini-presentation to someone (or record).",
        "Pick a 'hard' situation (ask a stranger for directions) and do it.",
    ],
    7: [
        "Speak once in a meeting/group; plan line, then deliver.",
        "Use your disclosure script once this week (do it today if pending).",
    ],
    8: [
        "Talk 5-10 min to 2+ people (friends/coworkers/online).",
        "Do 1-2 voluntary stutters in a public interaction.",
    ],
    9: [
        "Pick one avoidance situation and do it (call instead of email).",
        "Afterward, spend 10 min reflecting: what happened vs feared?",
    ],
    10: [
        "Work on your 10-15 min talk: outline/practice/deliver/review (pick today's step).",
        "In any conversation, switch tools on demand (slow a sentence, easy onset restart).",
    ],
    11: [
        "Enter a feared setting (formal meeting/interview practice); speak at least twice.",
        "Use your disclosure line once if appropriate.",
    ],
    12: [
        "Draft or refine your maintenance plan (weekly routine, warning signs, response plan).",
        "Do one exposure + one technique refresh to keep skills alive.",
    ],
}


def _task(
    id: str,
    title: str,
    description: str,
    type: TaskType,
    duration: int,
    instructions: List[str],
    **metadata,
) -> Task:
    return Task(
        id=id,
        title=title,
        description=description,
        type=type,
        duration=duration,
        instructions=instructions,
        **metadata,
    )


# ---------------------------------------------------------------------------
# Curriculum blocks
# ---------------------------------------------------------------------------

_TECHNIQUE_BLOCKS: Dict[int, Task] = {
    1: _task(
        "technique-m1",
        "Technique Drill: Prolonged + Pausing",
        "Install slow, prolonged speech with deliberate pausing.",
        "speech",
        12,
        [
            "5 min: prolonged speech on single words, then short phrases (10-20 simple phrases).",
            "5-7 min: read aloud very slowly; pause at punctuation; keep airflow steady.",
            "Stay relaxed; aim for smooth, slightly slower-than-normal speech.",
        ],
        difficulty="beginner",
        quarter=1,
        tags=["rate", "pausing", "awareness"],
        why_it_matters="Slow, deliberate speech builds breath-sound coordination and reduces rush that fuels blocks.",
    ),
    2: _task(
        "technique-m2",
        "Technique Drill: Easy Onset + Light Contacts",
        "Add gentle voice starts and soft consonant contacts.",
        "speech",
        12,
        [
            "5 min: easy onsets on vowel-initial words/phrases ('hhh-apple').",
            "5 min: light contacts on plosives (p, b, t, d, k, g) with soft touch.",
            "Combine in reading: slow rate + pausing + easy onset.",
        ],
        difficulty="easy",
        quarter=1,
        tags=["easy-onset", "light-contact", "pausing"],
        why_it_matters="Gentle voice starts and soft consonants reduce the tension that triggers blocks.",
    ),
    3: _task(
        "technique-m3",
        "Technique Drill: Alternating Focus",
        "Alternate between onsets + prolonged speech and light contacts + phrasing.",
        "speech",
        12,
        [
            "Day A: easy onset + prolonged voice across 2-3 words.",
            "Day B: light contacts + pausing/phrasing (4-7 word groups).",
            "Keep breath low/steady; aim for relaxed rhythm.",
        ],
        difficulty="easy",
        quarter=1,
        tags=["alternating", "phrasing"],
        why_it_matters="Switching focus keeps skills flexible and prepares you to combine them naturally.",
    ),
    4: _task(
        "technique-m4",
        "Technique Drill: Tool Chaining",
        "Chain shaping tools smoothly.",
        "speech",
        12,
        [
            "Pattern: easy onset, prolonged voice across 2-3 words, light contacts, pause, repeat.",
            "1-2 min each: run the pattern on short phrases.",
            "Finish with 3-5 minutes of over-learned slow reading (exaggerate the pattern).",
        ],
        difficulty="medium",
        quarter=2,
        tags=["tool-chaining", "pausing"],
        why_it_matters="Chaining skills builds automaticity so you can call on multiple tools in real speech.",
    ),
    5: _task(
        "technique-m5",
        "Technique Drill: Over-Learning + Pull-outs",
        "Blend shaping with first pull-outs.",
        "speech",
        12,
        [
            "5 min: extremely slow reading with over-clear onsets/contacts.",
            "5 min: simulate a block, then exit with a pull-out (reduce tension, slow/prolong, light contact).",
            "End with a normal-speed sentence while keeping airflow smooth.",
        ],
        difficulty="medium",
        quarter=2,
        tags=["pull-out", "over-learning"],
        why_it_matters="Practicing exits from mock blocks teaches you to release tension instead of forcing through.",
    ),
    6: _task(
        "technique-m6",
        "Technique Drill: Mixed Tools",
        "Mix shaping and modification in one run.",
        "speech",
        12,
        [
            "5 min: slow to moderate rate reading while keeping easy onsets and pausing.",
            "5-7 min: insert 3-5 intentional pull-outs/cancellations in reading.",
            "Stay calm; let airflow lead, not effort.",
        ],
        difficulty="medium",
        quarter=2,
        tags=["pull-out", "cancellation", "rate"],
        why_it_matters="Mixing shaping and modification simulates real-life needs to adjust mid-sentence.",
    ),
    7: _task(
        "technique-m7",
        "Technique Drill: Naturalness & Control",
        "Speed up while keeping smoothness and low tension.",
        "speech",
        12,
        [
            "Start exaggerated slow; gradually move to natural rate across 3-4 minutes.",
            "Randomly add pauses and restart with easy onset.",
            "Include 2-3 light pull-outs in reading or monologue.",
        ],
        difficulty="hard",
        quarter=3,
        tags=["naturalness", "rate", "pull-out"],
        why_it_matters="Brings fluency tools to a more natural pace while keeping control available on demand.",
    ),
    10: _task(
        "technique-m10",
        "Technique Drill: On-Demand Switching",
        "Quickly switch tools in higher-pressure prep.",
        "speech",
        10,
        [
            "Randomly cue yourself: 'slow for this sentence', 'easy onset start', 'light contact on consonants'.",
            "Restart mid-sentence with gentle onset after a deliberate pause.",
            "End with 60 seconds of normal-rate speech while keeping tension low.",
        ],
        difficulty="expert",
        quarter=4,
        tags=["on-demand", "rate", "restart"],
        why_it_matters="Practices rapid tool switching so you can stay composed in tougher contexts.",
    ),
}

_SPEAKING_BLOCKS: Dict[int, Task] = {
    1: _task(
        "speak-m1",
        "Structured Speaking: Monologue + Reading",
        "Low-pressure monologue and reading with recording.",
        "speech",
        12,
        [
            "5 min monologue alone about your day; record on phone.",
            "5-7 min reading aloud (news/book) using slow rate + pauses.",
            "Pick one clip per week to replay and note tension spots.",
        ],
        difficulty="beginner",
        quarter=1,
        tags=["monologue", "recording"],
        why_it_matters="Private practice builds control without social pressure while you hear your improvements.",
    ),
    2: _task(
        "speak-m2",
        "Structured Speaking: Recorded Monologue",
        "Build consistency with daily recordings.",
        "speech",
        12,
        [
            "10-12 min monologue on a topic (what you did last week).",
            "Use slow rate + pausing + easy onset; keep airflow steady.",
            "Once per week, listen back and jot 2 wins / 2 tension moments.",
        ],
        difficulty="easy",
        quarter=1,
        tags=["monologue", "recording", "review"],
        why_it_matters="Recording and reviewing helps you spot tension patterns and notice progress objectively.",
    ),
    3: _task(
        "speak-m3",
        "Structured Speaking: Alternate Focus",
        "Alternate onsets/contacts focus across days.",
        "speech",
        12,
        [
            "Day A: monologue with easy onset + prolonged flow.",
            "Day B: monologue with light contacts + phrasing.",
            "Record 2-3 times per week; review weekly.",
        ],
        difficulty="easy",
        quarter=1,
        tags=["monologue", "alternating"],
        why_it_matters="Alternating focus builds flexibility so you can combine tools smoothly later.",
    ),
    4: _task(
        "speak-m4",
        "Structured Speaking: Dialogues + Mini-Presos",
        "Mix monologues, mock dialogues, and mini-presentations.",
        "speech",
        12,
        [
            "2-3 days/week: recorded monologue (10-12 min).",
            "2-3 days/week: mock conversations (write 5-10 lines, read both parts).",
            "1 day/week: 5 min recorded 'teach someone' mini-presentation.",
        ],
        difficulty="medium",
        quarter=2,
        tags=["dialogue", "presentation", "recording"],
        why_it_matters="Dialogues and teaching build interaction skills and prepare you for real conversations.",
    ),
    6: _task(
        "speak-m6",
        "Structured Speaking: Present & Review",
        "Practice mini-presentations and reviews.",
        "speech",
        12,
        [
            "3 days/week: mock conversations or role-plays (booking, requesting).",
            "2 days/week: 5-10 min mini-presentation; record one.",
            "Weekly: re-listen, note pull-out/cancellation attempts.",
        ],
        difficulty="medium",
        quarter=2,
        tags=["presentation", "role-play"],
        why_it_matters="Role-plays and presentations let you rehearse tool use under pressure before going live.",
    ),
    7: _task(
        "speak-m7",
        "Structured Speaking: Real Conversations",
        "Use real conversations as the structured task.",
        "speech",
        12,
        [
            "3 days/week: a real conversation as the structured task (meetings, neighbors, coworkers).",
            "2 days/week: mini-presentation recorded on a tougher topic.",
            "After each real interaction: note one tool you used or could have used.",
        ],
        difficulty="hard",
        quarter=3,
        tags=["conversation", "transfer", "recording"],
        why_it_matters="Using the structured slot for real conversations accelerates transfer and desensitization.",
    ),
    10: _task(
        "speak-m10",
        "Structured Speaking: High-Stakes Reps",
        "Practice for talks, meetings, and harder calls.",
        "speech",
        12,
        [
            "At least 3 days/week: a mildly uncomfortable task (speak in a group, make a call, ask a follow-up).",
            "Prep lines, then deliver with tools on demand.",
            "If prepping a talk: outline, practice daily, deliver, review the video.",
        ],
        difficulty="expert",
        quarter=4,
        tags=["high-stakes", "meeting", "talk"],
        why_it_matters="Higher-stakes practice cements using tools quickly instead of old escape behaviors.",
    ),
}

_MODIFICATION_BLOCKS: Dict[int, Task] = {
    1: _task(
        "mod-m1",
        "Stuttering Modification: Voluntary Stuttering",
        "Reduce fear via gentle pseudostuttering.",
        "speech",
        6,
        [
            "5 gentle voluntary stutters per day in practice (alone/reading).",
            "Pick one word like 's-s-speak'; keep it calm and controlled.",
            "Goal: feel a stutter without extra tension or self-criticism.",
        ],
        difficulty="beginner",
        quarter=1,
        tags=["voluntary-stutter", "desensitization"],
        why_it_matters="Intentional stutters reduce fear and teach you to stay relaxed when a block starts.",
    ),
    3: _task(
        "mod-m3",
        "Stuttering Modification: Light Desensitization",
        "Blend voluntary stuttering into practice with calm continuations.",
        "speech",
        6,
        [
            "5 voluntary stutters; continue speaking without backing off.",
            "Notice body tension; let shoulders/jaw stay loose.",
            "Remind yourself: the goal is control, not perfection.",
        ],
        difficulty="easy",
        quarter=1,
        tags=["voluntary-stutter", "awareness"],
        why_it_matters="Keeping your place after a deliberate stutter builds resilience and reduces avoidance.",
    ),
    4: _task(
        "mod-m4",
        "Stuttering Modification: Pull-outs + Cancellations",
        "Practice exiting or redoing stutters calmly.",
        "speech",
        8,
        [
            "In reading/monologue: when you stutter, decrease tension and slide out with prolonged speech (pull-out).",
            "If the stutter was big: pause 1-2s, breathe, repeat the word with easy onset (cancellation).",
            "Simulate blocks if none occur; do 3-5 reps.",
        ],
        difficulty="medium",
        quarter=2,
        tags=["pull-out", "cancellation"],
        why_it_matters="Practicing exits and redos trains calm responses instead of force or avoidance.",
    ),
    6: _task(
        "mod-m6",
        "Stuttering Modification: Live Pull-outs",
        "Bring modification into role-plays and presentations.",
        "speech",
        8,
        [
            "Role-play or mini-presentation: if you stutter, keep eye contact and use a pull-out or cancellation.",
            "After the task, note one instance to improve next time.",
            "Stay in the moment; no word swaps.",
        ],
        difficulty="medium",
        quarter=2,
        tags=["pull-out", "presentation"],
        why_it_matters="Applying modification tools under simulated pressure bridges practice to real use.",
    ),
    7: _task(
        "mod-m7",
        "Stuttering Modification: Real Life Reps",
        "Use modification tools during real conversations.",
        "speech",
        8,
        [
            "In today's real interaction, allow at least one pull-out or cancellation instead of pushing through.",
            "Log one example (success or miss) right after.",
            "Keep eye contact; avoid escape behaviors.",
        ],
        difficulty="hard",
        quarter=3,
        tags=["pull-out", "real-life"],
        why_it_matters="Using tools during real conversations is the key to desensitization in daily life.",
    ),
    10: _task(
        "mod-m10",
        "Stuttering Modification: High-Stakes Calm",
        "Quality of response over perfection.",
        "speech",
        8,
        [
            "In higher-pressure tasks, aim for: no word swaps, no escape behaviors.",
            "If you stutter: soften tension, use a pull-out or cancellation, continue the message.",
            "Log how often you stayed present versus avoided.",
        ],
        difficulty="expert",
        quarter=4,
        tags=["high-stakes", "pull-out", "cancellation"],
        why_it_matters="In tougher settings, responding calmly to stutters preserves communication and confidence.",
    ),
}

# Month -> key into the block tables above; months share a block where the
# curriculum keeps the same focus for a stretch.
_TECHNIQUE_MONTH_KEY = {1: 1, 2: 2, 3: 3, 4: 4, 5: 5, 6: 6, 7: 7, 8: 7, 9: 7, 10: 10, 11: 10, 12: 10}
_SPEAKING_MONTH_KEY = {1: 1, 2: 2, 3: 3, 4: 4, 5: 4, 6: 6, 7: 7, 8: 7, 9: 7, 10: 10, 11: 10, 12: 10}
_MODIFICATION_MONTH_KEY = {1: 1, 2: 1, 3: 3, 4: 4, 5: 4, 6: 6, 7: 7, 8: 7, 9: 7, 10: 10, 11: 10, 12: 10}


def technique_block(month: int) -> Task:
    return _TECHNIQUE_BLOCKS[_TECHNIQUE_MONTH_KEY.get(month, 10)]


def speaking_block(month: int) -> Task:
    return _SPEAKING_BLOCKS[_SPEAKING_MONTH_KEY.get(month, 10)]


def modification_block(month: int) -> Task:
    return _MODIFICATION_BLOCKS[_MODIFICATION_MONTH_KEY.get(month, 10)]


def micro_challenge(month: int, day: int) -> Task:
    options = MICRO_CHALLENGE_OPTIONS.get(month, MICRO_CHALLENGE_OPTIONS[12])
    return _task(
        f"micro-{month}-{day}",
        "Micro-Challenge",
        "Short real-world action to build transfer and desensitization.",
        "exercise",
        5,
        [*MICRO_CHALLENGE_BASE, *options],
        difficulty=DIFFICULTY_BY_MONTH.get(month, "expert"),
        setting=SETTING_BY_MONTH.get(month, "public"),
        quarter=quarter_for_day(day),
        tags=["challenge", "transfer"],
    )


def breath_block(day: int) -> Task:
    return _task(
        f"breath-{day}",
        "Body + Breath Reset",
        "Loosen tension and anchor breath support.",
        "breathing",
        5,
        [
            "2 min: neck/shoulder/jaw loosening (slow rolls, gentle stretches).",
            "3 min: diaphragmatic breathing: in 4, hold 1, out 6-8; belly moves, chest stays quieter.",
        ],
        difficulty="beginner" if day <= 180 else "easy",
        quarter=quarter_for_day(day),
        setting="private",
        tags=["breath", "tension-release"],
    )


def log_block(day: int) -> Task:
    return _task(
        f"log-{day}",
        "Log + Plan",
        "Reflect to reinforce learning.",
        "mindfulness",
        5,
        [
            "Rate today: stuttering 0-10, tension 0-10, avoidance 0-10.",
            "Write 3 bullets: what went well, what was hard, one micro-challenge for tomorrow.",
            "If you stuttered: note one tool you used or will try next time.",
        ],
        difficulty="easy",
        quarter=quarter_for_day(day),
        tags=["reflection", "logging"],
    )


def cbt_block(day: int) -> Task:
    return _task(
        f"cbt-{day}",
        "Mindfulness + Thought Record",
        "Short cognitive/mindfulness check-in to reduce fear and avoidance.",
        "mindfulness",
        10,
        [
            "5 min mindful breathing: notice bodily tension and let shoulders/jaw soften.",
            "Write one recent speaking situation: emotion, automatic thought, evidence for/against, balanced response.",
            "Set one intention for the next challenge (e.g., allow a pull-out, keep eye contact).",
        ],
        difficulty="medium",
        quarter=quarter_for_day(day),
        tags=["mindfulness", "cbt", "reflection"],
        why_it_matters="Regular cognitive work reduces fear/avoidance and keeps you responding calmly to stutters.",
    )


# ---------------------------------------------------------------------------
# Practice library
# ---------------------------------------------------------------------------

PRACTICE_LIBRARY: List[Task] = [
    _task(
        "breath-belly",
        "Diaphragmatic Breathing",
        "Deep belly breathing to reduce tension",
        "breathing",
        5,
        [
            "Sit or lie down comfortably",
            "Place one hand on your chest, one on your belly",
            "Breathe in slowly through your nose for 4 counts",
            "Feel your belly rise while chest stays still",
            "Exhale slowly through your mouth for 6 counts",
            "Repeat for 5 minutes",
        ],
        difficulty="beginner",
        quarter=1,
        setting="private",
        tags=["breathing", "relaxation", "foundation"],
        why_it_matters="Proper breathing is the foundation of fluent speech and reduces physical tension",
        tips=["Practice lying down first to feel the movement", "Place a book on your belly to see it rise"],
    ),
    _task(
        "breath-box",
        "Box Breathing",
        "Structured breathing for calm and focus",
        "breathing",
        5,
        [
            "Breathe in for 4 counts",
            "Hold for 4 counts",
            "Breathe out for 4 counts",
            "Hold for 4 counts",
            "Repeat the cycle 5-10 times",
        ],
        difficulty="easy",
        quarter=1,
        setting="private",
        tags=["breathing", "focus", "anxiety-relief"],
        why_it_matters="Box breathing calms the nervous system before speaking situations",
        tips=["Use this before phone calls or meetings", "Visualize tracing a square"],
    ),
    _task(
        "breath-exhale",
        "Prolonged Exhalation",
        "Extend your breath for speech control",
        "breathing",
        5,
        [
            "Breathe in normally for 3 counts",
            "Exhale slowly and steadily for 8-10 counts",
            "Focus on smooth, controlled air release",
            "Repeat 10 times",
        ],
        difficulty="easy",
        quarter=1,
        setting="private",
        tags=["breathing", "speech-preparation", "control"],
        why_it_matters="Controlled exhalation powers smooth, sustained speech",
        tips=["Try exhaling on an 'sss' sound", "Imagine your breath is a stream"],
    ),
    _task(
        "speech-1",
        "Easy Onset",
        "Start words gently and smoothly",
        "speech",
        10,
        [
            "Choose 5 words starting with vowels (e.g., 'apple', 'open')",
            "Take a breath before each word",
            "Start the word very gently, like a whisper",
            "Gradually increase volume",
            "Practice each word 5 times",
        ],
        difficulty="easy",
        quarter=1,
        setting="private",
        tags=["speech-technique", "easy-onset", "vowels"],
        why_it_matters="Easy onset prevents hard vocal cord closure, reducing blocks",
        tips=["Start with 'ahhh' and transition to the word", "Think of breathing out the word"],
    ),
    _task(
        "speech-2",
        "Light Articulatory Contact",
        "Reduce tension in speech muscles",
        "speech",
        10,
        [
            "Practice words with p, b, t, d, k, g sounds",
            "Touch your lips/tongue very lightly",
            "Avoid pressing hard",
            "Say each word slowly: 'paper', 'table', 'good'",
            "Repeat 10 times each",
        ],
        difficulty="medium",
        quarter=2,
        setting="private",
        tags=["speech-technique", "articulation", "tension-reduction"],
        why_it_matters="Light contact reduces muscle tension that can trigger stuttering",
        tips=["Imagine your tongue is a feather", "Practice in slow motion first"],
    ),
    _task(
        "speech-3",
        "Stretched Speech",
        "Slow, continuous speaking",
        "speech",
        10,
        [
            "Choose a simple sentence",
            "Say it very slowly, stretching each word",
            "Keep sound flowing between words",
            "Gradually speed up while maintaining smoothness",
            "Practice 3 sentences",
        ],
        difficulty="medium",
        quarter=2,
        setting="private",
        tags=["speech-technique", "fluency-shaping", "continuous-speech"],
        why_it_matters="Stretched speech trains smooth transitions between words",
        tips=["Start very slow, slower than feels natural", "Connect words like beads on a string"],
    ),
    _task(
        "speech-4",
        "Pausing Practice",
        "Strategic pauses for control",
        "speech",
        10,
        [
            "Read a short paragraph",
            "Deliberately pause after each phrase",
            "Use pauses to breathe and reset",
            "Don't rush to fill silence",
            "Practice for 10 minutes",
        ],
        difficulty="medium",
        quarter=2,
        setting="private",
        tags=["speech-technique", "pausing", "control"],
        why_it_matters="Strategic pausing gives you time to prepare and reduces rush",
        tips=["Pauses make you sound more confident", "Count to 2 in your head during pauses"],
    ),
    _task(
        "speech-5",
        "Voluntary Stuttering",
        "Intentionally stutter to reduce fear",
        "speech",
        15,
        [
            "Choose 3 easy words",
            "Intentionally repeat the first sound 2-3 times",
            "Do this calmly and with control",
            "Practice in private first, then with a trusted person",
            "Notice how it feels different when controlled",
        ],
        difficulty="hard",
        quarter=2,
        setting="private",
        tags=["desensitization", "fear-reduction", "stuttering-management"],
        why_it_matters="Voluntary stuttering reduces fear and shame around stuttering",
        tips=["This feels weird at first, and that's normal", "You're in control of the stutter"],
    ),
    _task(
        "speech-6",
        "Conversation with Trusted Person",
        "Apply techniques in real conversation",
        "speech",
        15,
        [
            "Choose someone you trust",
            "Have a 10-minute conversation about your day",
            "Use one technique (easy onset or light contact)",
            "Don't worry about perfect fluency",
            "Reflect on what felt different",
        ],
        difficulty="medium",
        quarter=3,
        setting="trusted_person",
        tags=["real-world", "conversation", "technique-application"],
        why_it_matters="Real conversations are where techniques become natural",
        tips=["Tell them you're practicing", "Focus on connection, not perfection"],
    ),
    _task(
        "speech-7",
        "Phone Call Practice",
        "Call a business with a simple question",
        "speech",
        10,
        [
            "Choose a low-pressure call (store hours, directions)",
            "Write down what you'll say",
            "Use box breathing before calling",
            "Apply easy onset to the first word",
            "Celebrate making the call",
        ],
        difficulty="hard",
        quarter=3,
        setting="public",
        tags=["phone-calls", "real-world", "challenge"],
        why_it_matters="Phone calls are common feared situations; facing them builds confidence",
        tips=["Script it out first", "Most calls last under a minute"],
    ),
    _task(
        "speech-8",
        "Ordering Practice",
        "Order something at a cafe or restaurant",
        "speech",
        10,
        [
            "Choose a familiar place",
            "Decide what you'll order in advance",
            "Use pausing technique if needed",
            "Make eye contact with the person",
            "Don't apologize for stuttering",
        ],
        difficulty="hard",
        quarter=3,
        setting="public",
        tags=["ordering", "real-world", "public-speaking"],
        why_it_matters="Ordering is a daily situation; mastering it increases independence",
        tips=["Go at less busy times first", "The staff wants to help you"],
    ),
    _task(
        "speech-9",
        "Group Conversation",
        "Speak in a small group setting",
        "speech",
        20,
        [
            "Join a 3-4 person conversation",
            "Contribute at least 3 times",
            "Use techniques naturally",
            "If you stutter, keep going",
            "Notice others aren't judging",
        ],
        difficulty="expert",
        quarter=4,
        setting="small_group",
        tags=["group-speaking", "social", "advanced"],
        why_it_matters="Group conversations are complex; success here builds real confidence",
        tips=["You don't have to speak constantly", "Quality over quantity"],
    ),
    _task(
        "read-1",
        "Solo Reading Practice",
        "Build fluency through reading aloud",
        "reading",
        15,
        [
            "Choose a text you enjoy",
            "Read aloud at a comfortable pace",
            "Focus on smooth breathing",
            "Don't worry about mistakes",
            "Read for 15 minutes",
        ],
        difficulty="easy",
        quarter=1,
        setting="private",
        tags=["reading", "fluency", "practice"],
        why_it_matters="Reading aloud builds muscle memory for fluent speech patterns",
        tips=["Choose content that interests you", "Speed doesn't matter"],
    ),
    _task(
        "read-2",
        "Choral Reading",
        "Read along with an audiobook",
        "reading",
        15,
        [
            "Play an audiobook at normal speed",
            "Read along out loud",
            "Match the narrator's pace",
            "Notice how fluency feels",
            "Practice for 15 minutes",
        ],
        difficulty="easy",
        quarter=1,
        setting="private",
        tags=["reading", "choral-reading", "fluency"],
        why_it_matters="Choral reading often produces immediate fluency and shows what's possible",
        tips=["Use free audiobooks from library apps", "Start with books you know"],
    ),
    _task(
        "read-3",
        "Phrase Reading",
        "Read in meaningful phrases",
        "reading",
        15,
        [
            "Mark natural pause points in text",
            "Read one phrase at a time",
            "Pause and breathe between phrases",
            "Focus on thought groups",
            "Read for 15 minutes",
        ],
        difficulty="medium",
        quarter=2,
        setting="private",
        tags=["reading", "phrasing", "breathing"],
        why_it_matters="Phrase reading teaches natural speech rhythm and breathing patterns",
        tips=["Mark phrases with slashes", "Think of meaning, not just words"],
    ),
    _task(
        "read-4",
        "Reading to Someone",
        "Read aloud to a trusted person",
        "reading",
        15,
        [
            "Choose a short story or article",
            "Read to a family member or friend",
            "Use your techniques",
            "If you stutter, keep reading",
            "Ask them what they remember from the story",
        ],
        difficulty="medium",
        quarter=3,
        setting="trusted_person",
        tags=["reading", "audience", "real-world"],
        why_it_matters="Reading to someone adds gentle pressure while staying structured",
        tips=["They're listening to the story, not judging speech", "Pick engaging content"],
    ),
    _task(
        "mind-1",
        "Body Scan",
        "Release physical tension",
        "mindfulness",
        10,
        [
            "Lie down or sit comfortably",
            "Close your eyes",
            "Notice tension in jaw, neck, shoulders",
            "Breathe into tense areas",
            "Imagine tension melting away",
            "Scan your whole body for 10 minutes",
        ],
        difficulty="beginner",
        quarter=1,
        setting="private",
        tags=["mindfulness", "tension-release", "body-awareness"],
        why_it_matters="Physical tension directly affects speech; awareness is the first step to release",
        tips=["Do this before bed for better sleep", "Notice where you hold tension"],
    ),
    _task(
        "mind-2",
        "Acceptance Meditation",
        "Accept stuttering without judgment",
        "mindfulness",
        10,
        [
            "Sit quietly for 10 minutes",
            "Notice thoughts about speaking",
            "Acknowledge fears without judgment",
            "Remind yourself: 'It's okay to stutter'",
            "Practice self-compassion",
        ],
        difficulty="medium",
        quarter=2,
        setting="private",
        tags=["mindfulness", "acceptance", "self-compassion"],
        why_it_matters="Acceptance reduces the emotional weight of stuttering",
        tips=["This is hard but powerful", "You can't force acceptance; just practice noticing"],
    ),
    _task(
        "mind-3",
        "Positive Visualization",
        "Imagine fluent, confident speaking",
        "mindfulness",
        10,
        [
            "Close your eyes",
            "Imagine a speaking situation",
            "See yourself speaking calmly and clearly",
            "Feel the confidence in your body",
            "Practice this visualization for 10 minutes",
        ],
        difficulty="easy",
        quarter=1,
        setting="private",
        tags=["mindfulness", "visualization", "confidence"],
        why_it_matters="Your brain rehearses during visualization, building positive associations",
        tips=["Make it vivid: add sounds, feelings, details", "Visualize before challenging situations"],
    ),
    _task(
        "mind-4",
        "Gratitude Practice",
        "Focus on speech successes",
        "mindfulness",
        10,
        [
            "Write down 3 speaking successes from this week",
            "They can be small (said hello, made a call)",
            "Describe how it felt",
            "Thank yourself for the effort",
            "Notice progress over time",
        ],
        difficulty="easy",
        quarter=3,
        setting="private",
        tags=["gratitude", "reflection", "progress"],
        why_it_matters="Focusing on successes shifts attention away from fear",
        tips=["Keep a success journal", "Small wins count"],
    ),
    _task(
        "exercise-1",
        "Recorded Line Practice",
        "Low-pressure phone practice",
        "exercise",
        10,
        [
            "Call a recorded information line (weather, time, etc.)",
            "Practice speaking out loud as if ordering",
            "Focus on techniques you've learned",
            "Build confidence in a safe environment",
        ],
        difficulty="easy",
        quarter=2,
        setting="private",
        tags=["phone-practice", "low-pressure", "technique-application"],
        why_it_matters="Recorded lines let you practice phone speaking without judgment",
        tips=["Nobody is listening; it's just for you", "Try different techniques"],
    ),
    _task(
        "exercise-2",
        "Mirror Speaking",
        "Observe yourself speaking",
        "exercise",
        10,
        [
            "Stand in front of a mirror",
            "Talk about your day for 5 minutes",
            "Watch your face and body language",
            "Notice tension and consciously relax",
            "Practice looking confident",
        ],
        difficulty="easy",
        quarter=1,
        setting="private",
        tags=["self-observation", "body-language", "awareness"],
        why_it_matters="Seeing yourself speak builds awareness and confidence",
        tips=["You might look more relaxed than you feel", "Practice smiling"],
    ),
    _task(
        "exercise-3",
        "Challenging Words",
        "Practice your difficult words",
        "exercise",
        10,
        [
            "List 10 words you find challenging",
            "Practice each word 10 times",
            "Use easy onset and light contact",
            "Gradually speed up",
            "Celebrate small victories",
        ],
        difficulty="medium",
        quarter=2,
        setting="private",
        tags=["word-practice", "feared-words", "technique-application"],
        why_it_matters="Facing feared words directly reduces their power over you",
        tips=["Your feared words will change over time", "Practice makes them less scary"],
    ),
    _task(
        "exercise-4",
        "Extended Conversation",
        "Real-world speaking practice",
        "exercise",
        15,
        [
            "Have a 15-minute conversation",
            "With a friend, family member, or yourself",
            "Focus on communication, not perfection",
            "Use your techniques naturally",
            "Reflect on what went well",
        ],
        difficulty="medium",
        quarter=3,
        setting="trusted_person",
        tags=["conversation", "real-world", "technique-integration"],
        why_it_matters="Extended conversations build stamina and make techniques automatic",
        tips=["Length matters less than connection", "Notice when you forget about stuttering"],
    ),
    _task(
        "exercise-5",
        "Ask a Stranger",
        "Ask someone for help or directions",
        "exercise",
        5,
        [
            "Find a friendly-looking stranger",
            "Ask for the time, directions, or a recommendation",
            "Use techniques if needed",
            "Thank them and move on",
            "Celebrate your courage",
        ],
        difficulty="hard",
        quarter=3,
        setting="public",
        tags=["stranger-speaking", "real-world", "courage"],
        why_it_matters="Strangers show us that most people are kind and patient",
        tips=["Choose someone who looks relaxed", "Brief interactions are easiest"],
    ),
    _task(
        "exercise-6",
        "Tell a Story",
        "Share a personal story with someone",
        "exercise",
        15,
        [
            "Choose a simple story from your life",
            "Tell it to a friend or family member",
            "Focus on the emotions and details",
            "Use pausing for emphasis",
            "Notice that they care about the story, not the stuttering",
        ],
        difficulty="medium",
        quarter=4,
        setting="trusted_person",
        tags=["storytelling", "connection", "expression"],
        why_it_matters="Storytelling shifts focus from speech to message",
        tips=["Pick a story you love telling", "Emotion and passion carry the message"],
    ),
    _task(
        "exercise-7",
        "Presentation Practice",
        "Give a short presentation",
        "exercise",
        20,
        [
            "Choose a topic you know well",
            "Prepare a 3-minute talk",
            "Present to 1-2 people",
            "Use notes if needed",
            "Focus on sharing information, not perfect speech",
        ],
        difficulty="expert",
        quarter=4,
        setting="small_group",
        tags=["presentation", "public-speaking", "advanced"],
        why_it_matters="Presentations are peak challenges; success here is life-changing",
        tips=["Know your content well", "Pausing makes you sound authoritative"],
    ),
]


# ---------------------------------------------------------------------------
# Catalog index
# ---------------------------------------------------------------------------

class TaskCatalog:
    """Read-only index over every task a user can be scheduled, swapped to or practice."""

    def __init__(self, tasks: Iterable[Task]):
        self._by_id: Dict[str, Task] = {}
        for task in tasks:
            self._by_id.setdefault(task.id, task)
        self._tasks: List[Task] = list(self._by_id.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._by_id

    def get(self, task_id: str) -> Optional[Task]:
        return self._by_id.get(task_id)

    def all(self) -> List[Task]:
        return list(self._tasks)

    def by_type(self, task_type: TaskType) -> List[Task]:
        return [task for task in self._tasks if task.type == task_type]

    def by_difficulty(self, difficulty: TaskDifficulty) -> List[Task]:
        return [task for task in self._tasks if task.difficulty == difficulty]

    def by_quarter(self, quarter: int) -> List[Task]:
        """Tasks eligible in a quarter: first appropriate at or before it, or ungated."""
        return [task for task in self._tasks if not task.quarter or task.quarter <= quarter]

    def difficulty_counts(self) -> Dict[str, int]:
        counts = {difficulty: 0 for difficulty in DIFFICULTY_ORDER}
        for task in self._tasks:
            if task.difficulty:
                counts[task.difficulty] += 1
        return counts
