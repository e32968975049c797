"""Spork notification routing — fans an upload event out to every channel.

Channels are pluggable sinks: the paste (gist) channel, the chat (irccat)
relay, and the metrics (graphite) counter, or any custom sink
implementing the ``BaseSink`` protocol.

Notifications are best-effort.  The ``NotificationDispatcher`` isolates
each channel's failure from the others and from the promotion itself.
"""
