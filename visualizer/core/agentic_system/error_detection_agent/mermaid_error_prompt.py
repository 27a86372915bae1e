"""
Mermaid error detection prompt.

Fixed instruction template asking the model for a strict JSON verdict on a
piece of Mermaid code. The code is inserted unmodified.

Dependencies: langchain_core.prompts
System role: Prompt template for the error detection agent
"""

from langchain_core.prompts import ChatPromptTemplate

SYSTEM_PROMPT = """You are an AI expert in Mermaid syntax.

Analyze the Mermaid code you are given for syntax errors. Return a JSON object with the following format:
{{
  "isValid": true/false,
  "errors": ["error message 1", "error message 2", ...],
  "errorMessage": "A consolidated error message, or a success message if no errors are found."
}}

## Field Rules
- isValid: true if the code is valid, false otherwise
- errors: a list of error messages, empty if isValid is true
- errorMessage: a single string containing all error messages, or a success message if no errors were found

Ensure the JSON response is valid and parsable."""

ERROR_DETECTION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """Mermaid code to analyze:
```mermaid
{code}
```"""),
])


def get_error_detection_prompt() -> ChatPromptTemplate:
    """
    Get the error detection prompt template.

    Returns:
        ChatPromptTemplate: Prompt with a single `code` input variable
    """
    return ERROR_DETECTION_PROMPT
