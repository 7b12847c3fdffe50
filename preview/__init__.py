"""Preview package.

Per-frame plumbing for the clock: time source, frame clock, viewport
transform, overlay derivations and the ClockEngine that runs them in order.
Nothing here imports Qt; the Qt window only consumes FrameState.
"""
