"""
Chorale - SATB chord reading drills.

Chorale shows randomly generated four-part (soprano, alto, tenor, bass)
chords in a chosen set of keys, doublings, spacings and inversions, so a
singer or harmony student can practise reading them. Every chord it draws is
spelled diatonically in its key and fits real vocal ranges.

How it works:

- **Diatonic spelling.** A voicing is written as scale degrees relative to the
  chord root (``1 3 5 1'``). Letters come from stepping through the key,
  accidentals from the key signature, octaves from a reference root.
- **Range-aware search.** For every enabled voicing and key, all seven roots
  in five octave registers are tried; placements that keep every voice in
  range form a pool, and one is drawn uniformly.
- **Stepwise transposition.** The displayed chord can move up or down the
  scale one degree at a time without jumping register.
- **Terminal drill.** Space for the next chord, ``k``/``j`` to step,
  ``a`` to reveal the answer. Displayed chords can also be sent to a MIDI
  port or saved to a MIDI file.

Minimal example:

    ```python
    import chorale

    drill = chorale.Drill(keys=["C", "G"], inversions=["root", "third"], seed=1)
    shown = drill.next_chord()
    print(shown.chord.pitches, drill.annotation())
    ```

Package-level exports: ``Chord``, ``Drill``, ``VoicingSelection``,
``expand_selections``, ``generate_chord``, ``generate_random_chord``.
"""

import chorale.chords
import chorale.drill
import chorale.generation
import chorale.voicing_selection


Chord = chorale.chords.Chord
Drill = chorale.drill.Drill
VoicingSelection = chorale.voicing_selection.VoicingSelection
expand_selections = chorale.voicing_selection.expand_selections
generate_chord = chorale.generation.generate_chord
generate_random_chord = chorale.generation.generate_random_chord
