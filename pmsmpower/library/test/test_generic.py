import pytest

from pmsmpower.library.generic import *
from pmsmpower.power import motor_losses


def test_presets():
	for params in [define_lossless(), define_direct_drive()]:
		assert_non_salient(params)
		# infinite speed capable
		assert params.characteristic_current < params.phase_current_cmd_limit
		assert params.iq_cmd_lower_limit < -params.phase_current_cmd_limit
		assert params.iq_cmd_upper_limit > params.phase_current_cmd_limit


def test_lossless():
	losses = motor_losses(400, 50, 200, define_lossless())
	assert losses['speed'] == 0
	assert losses['hysteresis'] == 0
	assert losses['controller'] == 0
	assert losses['resistive'] < 0


def test_overrides():
	params = define_direct_drive(switching_frequency=10e3, Rs=0.1)
	assert params.switching_frequency == 10e3
	assert params.Rs == 0.1
	assert params.rds_on == define_direct_drive().rds_on
