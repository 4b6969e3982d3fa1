"""Exceptions raised by the generation pipeline and payment gate."""


class GenerationError(Exception):
    """Base class for failures that stop a generation run.

    ``message`` is safe to show to the end user.
    """

    default_message = "Failed to generate llms.txt."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class CrawlUnavailableError(GenerationError):
    """The crawl provider could not produce pages for this run."""

    default_message = "We could not crawl your site right now. Please try again."


class ConfigurationError(CrawlUnavailableError):
    """The crawl provider credential is not configured."""

    default_message = "Crawling is temporarily unavailable. Please try again later."


class ContentRequiredError(GenerationError):
    """A preview was requested for empty content."""

    default_message = "Content is required"


class PaymentError(Exception):
    """Checkout or webhook handling failed."""


class PaymentNotConfiguredError(PaymentError):
    """Stripe credentials are missing."""
