from pydantic import BaseModel, Field


class NewsletterContent(BaseModel):
    text: str
    html: str


class NewsletterIssue(BaseModel):
    title: str = Field(..., min_length=1)
    content: NewsletterContent
