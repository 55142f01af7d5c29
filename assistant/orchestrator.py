"""
assistant/orchestrator.py

ChatOrchestrator.handle_turn runs one chat turn:

1. fetch or create the session and append the user message
2. enrich with live travel data using what was known *before* this message
3. if there is data, append it as a system message
4. send the whole history to the model (ModelProviderFailure propagates)
5. append the reply, then extract travel info from the user text for later turns

Every append is followed by a prune: once history passes 20 messages it is cut to
the system instruction plus the 10 latest.

Turns on the same session key are serialized by the session lock. If the model
call fails, the user message (and any travel-data message) stay in history.
"""

import logging

from assistant.enrichment import enrich
from assistant.prompts import travel_data_message
from assistant.router import extract_travel_info
from assistant.session import DEFAULT_SESSION_KEY, SessionStore
from llm.client import call_llm


logger = logging.getLogger(__name__)


class ChatOrchestrator:
    def __init__(self, store: SessionStore, gateway, llm=call_llm, settings=None):
        self.store = store
        self.gateway = gateway
        self.llm = llm
        self.settings = settings

    def _ask_model(self, messages):
        if self.settings is None:
            return self.llm(messages)
        return self.llm(messages, self.settings)

    def _record(self, sess, role, content):
        # Cap is enforced after every append so history never exceeds MAX_HISTORY + 1.
        sess.add(role, content)
        sess.prune()

    def _lock_session(self, key):
        """Fetch the session for `key` and acquire its turn lock.

        Retries if the session was evicted while waiting for the lock, so the
        turn always runs on the session the store currently holds.
        """
        while True:
            sess = self.store.get_or_create(key)
            sess.lock.acquire()
            if self.store.get(key) is sess:
                return sess
            sess.lock.release()

    def handle_turn(self, session_key, user_text):
        key = session_key or DEFAULT_SESSION_KEY
        sess = self._lock_session(key)
        try:
            self._record(sess, "user", user_text)

            prior_info = sess.travel_info
            bundle = enrich(prior_info, self.gateway)
            if bundle:
                self._record(sess, "system", travel_data_message(bundle))

            reply = self._ask_model(list(sess.messages))

            self._record(sess, "assistant", reply)
            sess.travel_info = extract_travel_info(sess.travel_info, user_text)
            logger.debug("Session %s travel info: %s", key, sess.travel_info)
        finally:
            sess.lock.release()
        return reply
