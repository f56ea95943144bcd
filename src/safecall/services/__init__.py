"""
SafeCall Services Layer

Timer service, detection pipeline, response generator, alert
dispatcher and the call session engine that sequences them.
"""
