from backend.engine.feedback.sink import FanOutFeedback, FeedbackSink, NullFeedback

__all__ = ["FanOutFeedback", "FeedbackSink", "NullFeedback"]
