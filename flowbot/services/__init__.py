"""
Services - Message Pipeline

Flow detection, session reaping, fallback replies and the ChatService facade
exposed to the transport layer.
"""
