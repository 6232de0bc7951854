"""Prompt templates for GraphQL query generation."""
from langchain_core.prompts import ChatPromptTemplate


QUERY_GENERATION_SYSTEM_PROMPT = """Todays date: {today}
You are an assistant that generates GraphQL queries matching the schema provided.
Return exactly one GraphQL query statement and nothing else.
Select every field of the returned type, including all nested fields; the user only controls the filter argument.
Don't add any headings, explanations or extra text. Your response must look like "query <then the actual query goes here>"."""


QUERY_GENERATION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", QUERY_GENERATION_SYSTEM_PROMPT),
    ("human", """Schema:
{schema}

Generate a GraphQL query using a filter argument with the following conditions: {conditions}"""),
])


def get_query_generation_prompt() -> ChatPromptTemplate:
    """Get the query generation prompt template."""
    return QUERY_GENERATION_PROMPT
