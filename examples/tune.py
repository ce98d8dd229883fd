import logging
import random
import typing

import diddle
import diddle.config
import diddle.constants.ticks as ticks

logging.basicConfig(level=logging.INFO)

TONIC = 60

SYNTH_CHANNEL = 3
BASS_CHANNEL = 1
DRUM_CHANNEL = 9
PAD_CHANNEL = 4

rng = random.Random(2024)
defaults = diddle.config.load_defaults("diddle.yaml")
session = diddle.Session()


def phrase (start: int, end: int, resolution: int, delay: typing.Optional[str] = None) -> diddle.Diddle:

	"""A one-bar scale run, reformed at ``resolution``, jumbled and played four times."""

	return (
		diddle.Diddle(rng=rng, defaults=defaults)
		.run(start, end, duration=ticks.BAR, tonic=TONIC, mode="ionian")
		.reform(resolution=resolution, delay=delay)
		.jumble()
		.repeat(4)
	)


def drums (fourth: int, resolution: int) -> diddle.Diddle:

	return (
		diddle.Diddle(rng=rng, defaults=defaults)
		.add_note(36, ticks.BEAT)
		.add_note(38, ticks.BEAT)
		.add_note(40, ticks.BEAT)
		.add_note(fourth, ticks.BEAT)
		.reform(resolution=resolution, delay="random")
		.jumble()
		.repeat(4)
	)


# Intro
intro = phrase(TONIC, TONIC + 12, ticks.EIGHTH).render(session, SYNTH_CHANNEL)
phrase(TONIC + 12, TONIC + 24, ticks.BEAT, delay="random").velocity(random=True, min=60, max=100).delay(ticks.EIGHTH).render(session, SYNTH_CHANNEL)
phrase(TONIC + 36, TONIC, ticks.BEAT).render(session, SYNTH_CHANNEL)

# Parts A and B
synth_a = phrase(TONIC, TONIC + 12, ticks.SIXTEENTH, delay="random")
bass_a = phrase(TONIC - 24, TONIC - 12, ticks.EIGHTH, delay="random")
drums_a = drums(36, ticks.SIXTEENTH // 2)

synth_b = phrase(TONIC - 12, TONIC + 12, ticks.SIXTEENTH, delay="random")
bass_b = phrase(TONIC - 24, TONIC - 12, ticks.EIGHTH, delay="random")
drums_b = drums(42, ticks.SIXTEENTH)

# Body: AABB three times over a pad that follows the progression
progression = [
	{"chord": ["M", "C4"], "duration": ticks.BAR},
	{"chord": ["m", "A3"], "duration": ticks.BAR},
	{"chord": ["M", "F3"], "duration": ticks.BAR},
	{"chord": ["M", "G3"], "duration": ticks.BAR, "pattern": "0 [1 2] - 4"},
]

body_synth = (
	diddle.Diddle(rng=rng, defaults=defaults)
	.add_notes(synth_a.notes)
	.add_notes(synth_b.notes)
	.repeat(3)
	.delay(intro.duration())
	.render(session, SYNTH_CHANNEL)
)

diddle.Diddle(rng=rng, defaults=defaults).add_notes(bass_a.notes).add_notes(bass_b.notes).repeat(3).delay(intro.duration()).render(session, BASS_CHANNEL)
diddle.Diddle(rng=rng, defaults=defaults).add_notes(drums_a.notes).add_notes(drums_b.notes).repeat(3).delay(intro.duration()).render(session, DRUM_CHANNEL)

pad = (
	diddle.Diddle(progression=progression, rng=rng, defaults=defaults)
	.fill(pattern=[0, "_", [1, "-"], 2], delta="chord")
	.repeat(6)
	.delay(intro.duration())
)

pad.render(session, PAD_CHANNEL)
pad.harmonize(tonic=TONIC, min_pitch=TONIC - 12, max_pitch=TONIC + 12).velocity(level=70).render(session, PAD_CHANNEL)

# Outro
phrase(TONIC, TONIC + 12, ticks.BEAT).delay(body_synth.duration()).render(session, SYNTH_CHANNEL)
phrase(TONIC + 36, TONIC, ticks.EIGHTH).delay(body_synth.duration()).render(session, SYNTH_CHANNEL)

logging.info("Session length: %d ticks", session.duration())

session.to_midi_file().save("tune.mid")
