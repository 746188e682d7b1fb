import unittest

from interval import CuePlayer, IntervalTimer, InvalidStateError
from workouts import DEFAULT_REGISTRY, OutOfRangeError, WorkoutRegistry, WorkoutTemplate


class _HandleStub:
    def __init__(self, kind: str, delay_ms: int, fn):
        self.kind = kind
        self.delay_ms = delay_ms
        self.fn = fn
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class _SchedulerStub:
    def __init__(self):
        self.handles: list[_HandleStub] = []

    def schedule_repeating(self, interval_ms: int, fn) -> _HandleStub:
        handle = _HandleStub("repeating", interval_ms, fn)
        self.handles.append(handle)
        return handle

    def schedule_once(self, delay_ms: int, fn) -> _HandleStub:
        handle = _HandleStub("once", delay_ms, fn)
        self.handles.append(handle)
        return handle

    def repeating(self) -> list[_HandleStub]:
        return [handle for handle in self.handles if handle.kind == "repeating"]

    def active_repeating(self) -> list[_HandleStub]:
        return [handle for handle in self.repeating() if not handle.cancelled]

    def fire_once(self, delay_ms: int, *, include_cancelled: bool = False) -> int:
        fired = 0
        for handle in list(self.handles):
            if handle.kind != "once" or handle.delay_ms != delay_ms or handle.fired:
                continue
            if handle.cancelled and not include_cancelled:
                continue
            handle.fired = True
            handle.fn()
            fired += 1
        return fired


class _ToneEmitterStub:
    def __init__(self):
        self.tones: list[tuple[float, float]] = []

    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        self.tones.append((frequency_hz, duration_seconds))

    def frequencies(self) -> list[float]:
        return [frequency for frequency, _ in self.tones]


class _FailingToneEmitter:
    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        raise RuntimeError("no audio backend")


def _build_timer(registry: WorkoutRegistry = DEFAULT_REGISTRY, emitter=None):
    scheduler = _SchedulerStub()
    emitter = emitter or _ToneEmitterStub()
    ticks: list = []
    timer = IntervalTimer(
        registry=registry,
        cues=CuePlayer(emitter, scheduler),
        scheduler=scheduler,
        on_tick=ticks.append,
    )
    return timer, scheduler, emitter, ticks


def _single(name: str, sets: int, action: int, rest: int) -> WorkoutRegistry:
    return WorkoutRegistry(
        [WorkoutTemplate(name=name, sets=sets, action_seconds=action, break_seconds=rest)]
    )


class IntervalTimerCharacterizationTests(unittest.TestCase):
    def test_initial_state_uses_first_template(self) -> None:
        timer, _, _, _ = _build_timer()
        snapshot = timer.snapshot()

        self.assertEqual(0, snapshot.template_index)
        self.assertEqual("HIIT Workout", snapshot.template_name)
        self.assertEqual("action", snapshot.phase)
        self.assertEqual(1, snapshot.current_set)
        self.assertEqual(20, snapshot.remaining_seconds)
        self.assertFalse(snapshot.running)
        self.assertFalse(snapshot.has_started)
        self.assertEqual("idle", snapshot.status)

    def test_select_template_resets_state_for_every_template(self) -> None:
        timer, _, _, _ = _build_timer()
        for index, template in enumerate(DEFAULT_REGISTRY):
            timer.start()
            timer.tick()
            timer.pause()

            snapshot = timer.select_template(index)

            self.assertEqual(template.name, snapshot.template_name)
            self.assertEqual("action", snapshot.phase)
            self.assertEqual(1, snapshot.current_set)
            self.assertEqual(template.action_seconds, snapshot.remaining_seconds)
            self.assertFalse(snapshot.running)
            self.assertFalse(snapshot.has_started)

    def test_select_template_rejected_while_running(self) -> None:
        timer, _, _, _ = _build_timer()
        timer.start()

        with self.assertRaises(InvalidStateError):
            timer.select_template(1)

        snapshot = timer.snapshot()
        self.assertEqual(0, snapshot.template_index)
        self.assertTrue(snapshot.running)

    def test_select_template_out_of_range_keeps_state(self) -> None:
        timer, _, _, _ = _build_timer()
        timer.select_template(2)

        with self.assertRaises(OutOfRangeError):
            timer.select_template(DEFAULT_REGISTRY.count())
        with self.assertRaises(OutOfRangeError):
            timer.select_template(-1)

        self.assertEqual(2, timer.snapshot().template_index)

    def test_start_plays_start_cue_and_acquires_tick(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()

        snapshot = timer.start()

        self.assertTrue(snapshot.running)
        self.assertTrue(snapshot.has_started)
        self.assertEqual([(880.0, 0.15)], emitter.tones)
        self.assertEqual(1, len(scheduler.active_repeating()))
        self.assertEqual(1000, scheduler.active_repeating()[0].delay_ms)

    def test_start_is_idempotent(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()
        first = timer.start()
        second = timer.start()

        self.assertEqual(first, second)
        self.assertEqual(1, len(scheduler.repeating()))
        self.assertEqual([880.0], emitter.frequencies())

    def test_pause_is_idempotent_and_releases_tick(self) -> None:
        timer, scheduler, _, _ = _build_timer()
        timer.start()
        for _ in range(3):
            timer.tick()

        first = timer.pause()
        second = timer.pause()

        self.assertEqual(first, second)
        self.assertFalse(first.running)
        self.assertTrue(first.has_started)
        self.assertEqual(17, first.remaining_seconds)
        self.assertEqual("paused", first.status)
        self.assertEqual([], scheduler.active_repeating())

    def test_resume_after_pause_skips_start_cue(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()
        timer.start()
        timer.tick()
        timer.pause()

        snapshot = timer.start()

        self.assertTrue(snapshot.running)
        self.assertEqual(19, snapshot.remaining_seconds)
        self.assertEqual([880.0], emitter.frequencies())
        self.assertEqual(2, len(scheduler.repeating()))
        self.assertEqual(1, len(scheduler.active_repeating()))

    def test_tick_is_noop_while_stopped(self) -> None:
        timer, _, emitter, _ = _build_timer()

        self.assertIsNone(timer.tick())
        timer.start()
        timer.pause()
        self.assertIsNone(timer.tick())
        self.assertEqual(20, timer.snapshot().remaining_seconds)
        self.assertEqual([880.0], emitter.frequencies())

    def test_ticks_within_phase_decrement_only_remaining(self) -> None:
        timer, _, emitter, _ = _build_timer()
        timer.start()

        for count in range(1, 20):
            tick = timer.tick()
            if tick is None:
                self.fail("Expected a tick while running")
            self.assertFalse(tick.transitioned)
            self.assertEqual(20 - count, tick.snapshot.remaining_seconds)
            self.assertEqual("action", tick.snapshot.phase)
            self.assertEqual(1, tick.snapshot.current_set)

        self.assertEqual([880.0], emitter.frequencies())

    def test_action_end_moves_to_break_with_deferred_start_cue(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()
        timer.start()

        last = None
        for _ in range(20):
            last = timer.tick()

        if last is None:
            self.fail("Expected a tick while running")
        self.assertTrue(last.transitioned)
        self.assertEqual("action", last.ended_phase)
        self.assertEqual("break", last.snapshot.phase)
        self.assertEqual(10, last.snapshot.remaining_seconds)
        self.assertEqual(1, last.snapshot.current_set)
        self.assertTrue(last.snapshot.running)

        # End cue plays synchronously, the break start cue only after 100 ms.
        self.assertEqual([880.0, 659.0], emitter.frequencies())
        self.assertEqual(1, scheduler.fire_once(100))
        self.assertEqual([880.0, 659.0, 880.0], emitter.frequencies())

    def test_cue_tones_follow_after_gap(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()
        timer.start()
        for _ in range(20):
            timer.tick()
        scheduler.fire_once(100)
        scheduler.fire_once(150)

        self.assertEqual(
            [
                (880.0, 0.15),
                (659.0, 0.15),
                (880.0, 0.15),
                (1046.0, 0.15),
                (523.0, 0.3),
                (1046.0, 0.15),
            ],
            emitter.tones,
        )

    def test_break_end_starts_next_action_set(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()
        timer.start()
        for _ in range(20 + 10):
            timer.tick()

        snapshot = timer.snapshot()
        self.assertEqual("action", snapshot.phase)
        self.assertEqual(2, snapshot.current_set)
        self.assertEqual(20, snapshot.remaining_seconds)
        self.assertEqual([880.0, 659.0, 659.0], emitter.frequencies())
        self.assertEqual(2, scheduler.fire_once(100))

    def test_full_cycle_completes_without_trailing_break(self) -> None:
        timer, scheduler, emitter, _ = _build_timer(_single("Short", 2, 5, 3))
        timer.start()

        ticks = [timer.tick() for _ in range(5 + 3 + 5)]

        last = ticks[-1]
        if last is None:
            self.fail("Expected the final tick to be processed")
        self.assertTrue(last.completed)
        snapshot = timer.snapshot()
        self.assertFalse(snapshot.running)
        self.assertFalse(snapshot.has_started)
        self.assertEqual("action", snapshot.phase)
        self.assertEqual(2, snapshot.current_set)
        self.assertEqual(0, snapshot.remaining_seconds)
        self.assertTrue(snapshot.is_complete)
        self.assertEqual("complete", snapshot.status)
        self.assertEqual([], scheduler.active_repeating())
        self.assertIsNone(timer.tick())
        # Only the break and second action start cues were deferred.
        self.assertEqual([880.0, 659.0, 659.0, 659.0], emitter.frequencies())
        self.assertEqual(2, scheduler.fire_once(100))
        self.assertEqual([880.0, 659.0, 659.0, 659.0, 880.0, 880.0], emitter.frequencies())

    def test_single_set_workout_never_enters_break(self) -> None:
        timer, _, _, _ = _build_timer(_single("Once", 1, 2, 30))
        timer.start()
        timer.tick()
        tick = timer.tick()

        if tick is None:
            self.fail("Expected the final tick to be processed")
        self.assertTrue(tick.completed)
        self.assertEqual("action", tick.snapshot.phase)

    def test_zero_length_break_does_not_loop(self) -> None:
        timer, _, _, _ = _build_timer(_single("No Rest", 2, 2, 0))
        timer.start()
        timer.tick()
        into_break = timer.tick()

        if into_break is None:
            self.fail("Expected the break transition tick")
        self.assertEqual("break", into_break.snapshot.phase)
        self.assertEqual(0, into_break.snapshot.remaining_seconds)
        self.assertEqual(1.0, into_break.snapshot.progress_fraction)

        out_of_break = timer.tick()
        if out_of_break is None:
            self.fail("Expected the action transition tick")
        self.assertTrue(out_of_break.transitioned)
        self.assertEqual("break", out_of_break.ended_phase)
        self.assertEqual("action", out_of_break.snapshot.phase)
        self.assertEqual(2, out_of_break.snapshot.current_set)
        self.assertEqual(2, out_of_break.snapshot.remaining_seconds)

        timer.tick()
        final = timer.tick()
        if final is None:
            self.fail("Expected the completion tick")
        self.assertTrue(final.completed)

    def test_reset_matches_select_template_state(self) -> None:
        timer, scheduler, _, _ = _build_timer()
        selected = timer.select_template(3)
        timer.start()
        for _ in range(60):
            timer.tick()

        reset = timer.reset()

        self.assertEqual(selected, reset)
        self.assertEqual([], scheduler.active_repeating())

    def test_reset_from_complete_rewinds_to_first_set(self) -> None:
        timer, _, _, _ = _build_timer(_single("Short", 2, 5, 3))
        timer.start()
        for _ in range(13):
            timer.tick()

        snapshot = timer.reset()

        self.assertEqual(1, snapshot.current_set)
        self.assertEqual(5, snapshot.remaining_seconds)
        self.assertEqual("idle", snapshot.status)

    def test_start_after_complete_plays_start_cue_and_finishes_again(self) -> None:
        timer, _, emitter, _ = _build_timer(_single("Short", 2, 5, 3))
        timer.start()
        for _ in range(13):
            timer.tick()

        timer.start()
        tick = timer.tick()

        if tick is None:
            self.fail("Expected a tick after restarting")
        self.assertTrue(tick.completed)
        self.assertEqual(2, tick.snapshot.current_set)
        self.assertEqual([880.0, 659.0, 659.0, 659.0, 880.0, 659.0], emitter.frequencies())

    def test_reset_cancels_pending_start_cue(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()
        timer.start()
        for _ in range(20):
            timer.tick()

        timer.reset()

        self.assertEqual(0, scheduler.fire_once(100))
        self.assertEqual([880.0, 659.0], emitter.frequencies())

    def test_stale_start_cue_is_ignored_after_template_switch(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()
        timer.start()
        for _ in range(20):
            timer.tick()
        timer.pause()
        timer.select_template(1)

        # Even a callback that escaped cancellation must not play.
        self.assertEqual(1, scheduler.fire_once(100, include_cancelled=True))
        self.assertEqual([880.0, 659.0], emitter.frequencies())

    def test_pause_keeps_pending_start_cue(self) -> None:
        timer, scheduler, emitter, _ = _build_timer()
        timer.start()
        for _ in range(20):
            timer.tick()
        timer.pause()

        self.assertEqual(1, scheduler.fire_once(100))
        self.assertEqual([880.0, 659.0, 880.0], emitter.frequencies())

    def test_scheduled_tick_notifies_listener(self) -> None:
        timer, scheduler, _, ticks = _build_timer()
        timer.start()

        scheduler.active_repeating()[0].fn()

        self.assertEqual(1, len(ticks))
        self.assertEqual(19, ticks[0].snapshot.remaining_seconds)

    def test_completion_releases_tick_from_inside_callback(self) -> None:
        timer, scheduler, _, ticks = _build_timer(_single("Once", 1, 1, 0))
        timer.start()
        handle = scheduler.active_repeating()[0]

        handle.fn()

        self.assertTrue(handle.cancelled)
        self.assertTrue(ticks[-1].completed)

    def test_emitter_failure_does_not_reach_state_machine(self) -> None:
        timer, _, _, _ = _build_timer(_single("Short", 2, 1, 1), emitter=_FailingToneEmitter())

        with self.assertLogs("interval.cues", level="WARNING"):
            timer.start()
            tick = timer.tick()

        if tick is None:
            self.fail("Expected a tick while running")
        self.assertEqual("break", tick.snapshot.phase)


class IntervalSnapshotTests(unittest.TestCase):
    def test_progress_fraction_uses_phase_duration(self) -> None:
        timer, _, _, _ = _build_timer()
        timer.start()
        for _ in range(5):
            timer.tick()
        self.assertAlmostEqual(0.25, timer.snapshot().progress_fraction)

        for _ in range(15):
            timer.tick()
        snapshot = timer.snapshot()
        self.assertEqual("break", snapshot.phase)
        self.assertEqual(10, snapshot.phase_duration_seconds)
        self.assertEqual(0.0, snapshot.progress_fraction)

    def test_progress_fraction_is_one_on_completion(self) -> None:
        timer, _, _, _ = _build_timer(_single("Once", 1, 4, 0))
        timer.start()
        for _ in range(4):
            timer.tick()

        self.assertEqual(1.0, timer.snapshot().progress_fraction)


if __name__ == "__main__":
    unittest.main()
