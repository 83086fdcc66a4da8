import numpy as np

from pmsmpower.utils import *


@dataclass
class MotorParams(Base):
	"""Non-salient PMSM and inverter parameters

	All electrical quantities are in the dq frame,
	with currents expressed as peak phase amps.
	Loss coefficients default to zero; a lossless machine and drive.
	"""

	# electrical
	Ld: float
	Lq: float
	Rs: float
	flux_linkage: float	# Wb
	num_pole_pairs: int

	# drive limits
	modulation_limit: float	# fraction of V / sqrt(3) available as dq voltage
	phase_current_cmd_limit: float
	iq_cmd_lower_limit: float
	iq_cmd_upper_limit: float

	# inverter losses
	switching_frequency: float = 0
	specific_switching_loss: float = 0	# J per volt-amp per cycle
	fixed_loss_sq_coeff: float = 0
	fixed_loss_lin_coeff: float = 0
	rds_on: float = 0

	# speed loss polynomial, in rotor rad/s
	omega_loss_coefficient_cubic: float = 0
	omega_loss_coefficient_sq: float = 0
	omega_loss_coefficient_lin: float = 0
	hysteresis_loss_coefficient: float = 0

	def __post_init__(self):
		assert self.num_pole_pairs >= 1
		assert self.flux_linkage > 0
		assert self.phase_current_cmd_limit > 0

	@property
	def salience(self):
		return self.Ld - self.Lq

	@property
	def L(self):
		"""Machine inductance

		Saliency is neglected; the q-axis inductance is used since it has the larger
		impact on performance when not heavily flux weakening.
		"""
		return self.Lq

	@property
	def torque_constant(self):
		"""Nm per amp of Iq"""
		return 1.5 * self.num_pole_pairs * self.flux_linkage

	@property
	def characteristic_current(self):
		"""Short circuit current at infinite speed"""
		return self.flux_linkage / self.L


def assert_non_salient(params: MotorParams):
	"""The limit and loss derivations are only valid for Ld == Lq"""
	assert np.abs(params.salience) <= EPS, \
		f'salient machines are not supported; Ld - Lq = {params.salience}'
