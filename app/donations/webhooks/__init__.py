"""
Coinbase Commerce webhook ingestion.

- signature: HMAC-SHA256 verification of the raw body
- events: charge event type -> donation status
- outcomes: WebhookOutcome with fixed HTTP status and body
- handlers: process_webhook pipeline
- views: CoinbaseWebhookView endpoint
"""
