"""
assistant/session.py

Conversation session state and the in-memory session store.

Classes:
- DateRange / TravelInfo: immutable travel-intent fields inferred from chat (destination, source, dates, budget).
- Session: message history (system instruction first) plus travel info and a per-session turn lock.
- SessionStore: thread-safe key -> Session map with lazy creation, history pruning and idle/LRU eviction.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field

from assistant.prompts import SYSTEM_PROMPT


logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "default"
MAX_HISTORY = 20
KEEP_RECENT = 10


@dataclass(frozen=True)
class DateRange:
    start: str
    end: str


@dataclass(frozen=True)
class TravelInfo:
    destination: str | None = None
    source: str | None = None
    dates: DateRange | None = None
    budget: int | None = None


@dataclass
class Session:
    messages: list[dict[str, str]] = field(default_factory=list)  # list of {role, content}
    travel_info: TravelInfo = field(default_factory=TravelInfo)
    last_seen: float = field(default_factory=time.monotonic)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def seeded(cls, system_prompt=SYSTEM_PROMPT):
        return cls(messages=[{"role": "system", "content": system_prompt}])

    def add(self, role, content):
        """Append a message to the conversation history."""
        self.messages.append({"role": role, "content": content})

    def prune(self, max_messages=MAX_HISTORY, keep=KEEP_RECENT):
        """Drop old turns once the history grows past `max_messages`.

        Keeps the system instruction plus the `keep` most recent messages.
        Returns the number of messages discarded.
        """
        if len(self.messages) <= max_messages:
            return 0
        before = len(self.messages)
        self.messages = [self.messages[0]] + self.messages[-keep:]
        return before - len(self.messages)


class SessionStore:
    """Process-wide session map.

    Sessions idle for longer than `ttl_seconds` are dropped, and at most
    `max_sessions` are kept (least recently used evicted first). Eviction
    runs whenever a session is fetched or created.
    """

    def __init__(self, ttl_seconds=6 * 60 * 60, max_sessions=1000, system_prompt=SYSTEM_PROMPT, clock=time.monotonic):
        self._sessions: OrderedDict[str, Session] = OrderedDict()
        self._lock = threading.Lock()
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self.system_prompt = system_prompt
        self._clock = clock

    def __len__(self):
        with self._lock:
            return len(self._sessions)

    def __contains__(self, key):
        with self._lock:
            return key in self._sessions

    def get(self, key) -> Session | None:
        with self._lock:
            return self._sessions.get(key)

    def get_or_create(self, key=DEFAULT_SESSION_KEY) -> Session:
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            sess = self._sessions.get(key)
            if sess is None:
                sess = Session.seeded(self.system_prompt)
                self._sessions[key] = sess
                logger.info("Created session %s", key)
                self._evict_overflow(key)
            else:
                self._sessions.move_to_end(key)
            sess.last_seen = now
            return sess

    def append(self, key, message):
        self.get_or_create(key).add(message["role"], message["content"])

    def prune(self, key):
        sess = self.get(key)
        if sess is None:
            return 0
        dropped = sess.prune()
        if dropped:
            logger.debug("Pruned %d messages from session %s", dropped, key)
        return dropped

    def delete(self, key):
        with self._lock:
            return self._sessions.pop(key, None) is not None

    def _evict_idle(self, now):
        if not self.ttl_seconds:
            return
        stale = [
            k for k, s in self._sessions.items()
            if now - s.last_seen > self.ttl_seconds and not s.lock.locked()
        ]
        for k in stale:
            del self._sessions[k]
        if stale:
            logger.info("Evicted %d idle session(s)", len(stale))

    def _evict_overflow(self, keep):
        # Sessions in the middle of a turn and the one just created are never evicted,
        # so the cap can be exceeded while turns are running.
        excess = len(self._sessions) - self.max_sessions if self.max_sessions else 0
        if excess <= 0:
            return
        victims = [k for k, s in self._sessions.items() if k != keep and not s.lock.locked()][:excess]
        for key in victims:
            del self._sessions[key]
            logger.info("Evicted least recently used session %s", key)
