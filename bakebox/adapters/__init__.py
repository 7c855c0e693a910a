"""
Bakebox Adapters.

Implementations of protocols for external systems.
Adapters use lazy imports — they only fail if you actually call them
without the required package installed.

- gemini: GeminiImageBackend (Google Gemini image models)
- noop: NoopImageBackend (fixed placeholder image, no network)
"""
