"""
The MODEL layer contains pure data structures and their change notification.
It has NO knowledge of pixel buffers, transforms or registration.
It deals with Geometry and I/O.
"""
