"""Summarize the appointments of a day into talking points."""

from pydantic import BaseModel, Field

from app.ai.client import GenerativeClient, parse_model_output

EMPTY_CALENDAR_SUMMARY = "No appointments for the selected day to summarize."

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {
            "type": "STRING",
            "description": "A concise summary of the day's appointments including relevant talking points.",
        },
    },
    "required": ["summary"],
}


class AppointmentSummaryInput(BaseModel):
    calendar_data: str = Field(
        "",
        description="The day's appointments as a JSON list with date, time, attendees and description.",
    )


class AppointmentSummaryOutput(BaseModel):
    summary: str = Field(..., min_length=1)


def build_prompt(data: AppointmentSummaryInput) -> str:
    return (
        "You are an AI assistant designed to summarize a user's calendar appointments for the day.\n\n"
        "The user will provide calendar data in JSON format. Each record contains the "
        "appointment time, attendees, and description.\n\n"
        "Your job is to create a concise summary of the appointments, focusing on key "
        "talking points and any preparation needed.\n\n"
        f"Calendar Data: {data.calendar_data}"
    )


def is_empty_calendar(calendar_data: str) -> bool:
    return calendar_data.strip() in ("", "[]")


def generate_appointment_summary(
    data: AppointmentSummaryInput,
    client: GenerativeClient,
) -> AppointmentSummaryOutput:
    # Nothing to summarize, the model is not called
    if is_empty_calendar(data.calendar_data):
        return AppointmentSummaryOutput(summary=EMPTY_CALENDAR_SUMMARY)

    raw = client.generate_json(build_prompt(data), RESPONSE_SCHEMA)

    return parse_model_output(AppointmentSummaryOutput, raw)
