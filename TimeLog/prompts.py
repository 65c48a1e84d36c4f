"""
This file contains all the LLM prompts used in TimeLog.
"""

# --- Code Summary Prompts ---

CODE_SUMMARY_PROMPT = """
You are a developer assistant. Summarize the following code snippet in 1-2 concise sentences,
focusing on what it does and any notable patterns. Do not include code in your reply.

```
{code_snippet}
```
"""

TASK_AWARE_SUMMARY_PROMPT = """
You are a developer assistant. The developer describes their current task as:
"{task_hint}"

Summarize, in 1-2 concise sentences, what the code snippet below does as it relates to that task.
Rules:
* Plain prose only. Do not include code, markdown, bullet points or quotes from the snippet.
* Do not restate the task description; describe the code.
* If the snippet is unrelated to the task, say what the code does without guessing a connection.

```
{code_snippet}
```
"""

# --- Timesheet Prompts ---

TIMESHEET_SCHEMA = """{
  "date": "YYYY-MM-DD",
  "tasks": [
    {
      "category": "string",
      "entries": [
        { "task": "string", "start": "HH:MM", "end": "HH:MM" }
      ]
    }
  ]
}"""

TIMESHEET_PROMPT = """
You are a project manager assistant. Given the following development activity log entries for {date_label},
produce a structured daily timesheet in strict JSON format.

Rules:
1. Group entries into continuous task blocks. Each block should be under 1 hour.
2. Merge repeated tasks (e.g. Task A -> Task B -> Task A merges into a single Task A block).
3. Assign a descriptive category to each group (e.g. "Coding: Auth Feature", "Debugging", "Code Review").
4. Infer start/end times (24-hour HH:MM) from the timestamps of the log entries.
5. Output ONLY valid JSON matching this exact schema, with "date" set to "{date_label}". No markdown, no explanation:

{schema}

Log entries:
{entries_json}
"""
