# divebot

Components for a small underwater robot. They sample sensors, estimate
position and depth, steer with proportional control, and log every
component's state as fixed-size binary records.

Components that touch pins work through a `Board`, which covers pin mode,
digital and analog reads, and digital and analog writes. `SimulatedBoard`
implements `Board` in memory, so the components run and are tested on an
ordinary computer.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `divebot.datasource.DataSource` is the abstract base for anything that
  logs. Each source has `csv_var_names` and `csv_data_types`. It returns its
  record as little-endian bytes from `data_bytes()`.
  `write_data_bytes(buffer, idx)` copies that record into a `bytearray` and
  returns the next free index. It raises `IndexError` if the record does not
  fit.
- `divebot.hardware` holds the pin numbers and the loop timing offsets as
  constants. It also defines:
  - `PinMode` (`INPUT`, `OUTPUT`, `INPUT_PULLUP`).
  - The abstract `Board`.
  - `SimulatedBoard`. `set_input(pin, value)` sets what a pin reads, and
    `output(pin)` returns the last value written to it. `output` raises
    `KeyError` if nothing was written. An unset pulled-up pin reads high.
- `divebot.printer.Printer` is a serial status screen built from 13 value
  rows and a stack of messages:
  - `print_value(row, value)` keeps a value on a row. An out-of-range row
    becomes a message instead.
  - `print_message(text, times)` puts a message on top. It is shown for
    `times` refreshes, or for good when `times` is 0.
  - `render(ms)` returns the screen text.
  - `print_to_serial(ms)` writes the screen to the stream (stdout by
    default) and ages the messages.
  - `format_time(ms)` gives the `S.mmm` timestamp.
- Samplers:
  - `adc.ADCSampler` reads 16 analog channels.
  - `button.ButtonSampler` reads the user button, where low means pressed.
  - `errorflags.ErrorFlagSampler` stores the three active-low H-bridge
    error flags.
- `motor.MotorDriver` takes three signed commands from -255 to 255 through
  `drive(a, b, c)`. It writes a direction pin and a PWM value for each
  motor. `deadzone_pwm` rescales the magnitude past the motors' dead zone.
- `gps`:
  - `GPSReceiver` is an abstract NMEA receiver.
  - `SensorGPS` configures the receiver and copies its fix into `GPSState`.
  - `convert_deg_min_to_dec_deg` converts `DDDMM.mmmm` values to decimal
    degrees.
- `gpsled.GPSLockLED` blinks the lock LED with a duty cycle set by the
  satellite count. The LED stays lit once enough satellites are acquired.
- `imu.SensorIMU` reads two `AxisSensor`s (accelerometer and magnetometer).
  It applies offsets and iron compensation, and computes roll, pitch and
  heading in degrees into `IMUState`.
- Estimators:
  - `xy_state.XYStateEstimator` turns latitude and longitude into metres
    from a fixed origin, and the IMU heading into yaw.
  - `z_state.ZStateEstimator` turns a raw pressure reading into depth.
- Control:
  - `depth_control.DepthControl` dives through depth waypoints, holding at
    each for a delay, and then surfaces.
  - `surface_control.SurfaceControl` drives the left and right motors
    towards x, y waypoints.
  - `surface_control.angle_diff` wraps an angle into [-π, π].
- `logger.Logger` takes up to 10 sources through `include()`. Its `init()`:
  - picks the first unused `logNNN.bin` in a directory;
  - writes the column names and types to `infNNN.txt`.

  Each `log()` call then appends one 256-byte block. `pad_number` gives the
  zero-padded file number.

## Example

```python
import tempfile

from divebot.hardware import SimulatedBoard
from divebot.logger import Logger
from divebot.motor import MotorDriver
from divebot.printer import Printer

board = SimulatedBoard()
printer = Printer()

motors = MotorDriver(board)
motors.init()
motors.drive(100, -100, 0)
print(motors.print_state())   # Motors: PWMA:  121 PWMB: -121 PWMC:  0
print(board.output(3))        # 121, the speed pin of motor A

with tempfile.TemporaryDirectory() as directory:
    logger = Logger(directory, printer)
    logger.include(motors)
    logger.init()
    logger.log()
    print(logger.print_state())
```

## What it does not do

- There is no command and no main loop. Calling the components at their
  offsets within `LOOP_PERIOD` is left to the program that uses them.
- The only `Board` is `SimulatedBoard`. Nothing here drives real pins.
- `GPSReceiver` and `AxisSensor` are interfaces only. No NMEA parser or
  sensor driver is included; supply your own subclasses.
- The logger writes to an ordinary directory rather than to a storage card.
  It provides no tool for reading the binary logs back.